"""Scene snapshot — dataclasses, parsing, and reference lookup."""

from .models import Vec3, GridInfo, SceneObjectRef, CommandRecord, ZERO, ONE
from .parsing import (
    parse_vec3, parse_scene_object, parse_scene, parse_command, command_to_dict,
)
from .lookup import find_object_by_description, color_name

__all__ = [
    # Models
    "Vec3", "GridInfo", "SceneObjectRef", "CommandRecord", "ZERO", "ONE",
    # Parsing
    "parse_vec3", "parse_scene_object", "parse_scene", "parse_command",
    "command_to_dict",
    # Lookup
    "find_object_by_description", "color_name",
]
