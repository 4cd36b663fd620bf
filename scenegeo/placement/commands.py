"""Command enhancement — make translated commands concrete.

The external translator emits records such as::

    {"action": "create", "type": "sphere",
     "relativeToObject": "red cube", "spatialRelation": "on-top-of"}

This module resolves the reference, runs the placement resolver and
returns records with explicit ``x/y/z`` (and ``scaleX/Y/Z`` when the
footprint is matched) for the scene-mutation layer.  Records that cannot
be resolved are passed through unchanged.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from scenegeo.scene.lookup import find_object_by_description
from scenegeo.scene.models import Vec3, SceneObjectRef, CommandRecord, ONE
from scenegeo.scene.parsing import parse_command

from .dimensions import is_house_like, is_roof_like, is_room, is_ground
from .models import SpatialRelation
from .resolver import (
    hypothetical, resolve_placement, center_in_room, find_roof_structure, roof_placement,
)
from .serialization import vec3_to_xyz


log = logging.getLogger(__name__)


PASSTHROUGH_ACTIONS = ("align", "place-on-floor")
SPATIAL_ACTIONS = ("create", "move", "rotate")
PENDING_OBJECT_ID = "temp-id-needs-generation"

# Default colors for housing structures created without one
HOUSING_COLORS = {
    "house-basic": "#8B4513",
    "house-room": "#DEB887",
    "house-hallway": "#808080",
    "house-roof-flat": "#654321",
    "house-roof-pitched": "#654321",
}
DEFAULT_HOUSING_COLOR = "#8B4513"
CONNECTION_SPACING = 4.0


def connection_position(scene: Sequence[SceneObjectRef], type_tag: str) -> Vec3:
    """Where a new housing structure joins the existing ones.

    A lone structure gets a neighbour 4 units along +X.  With several,
    hallways go to their centroid and anything else extends the layout
    past the right-most structure.
    """
    structures = [
        o for o in scene
        if is_house_like(o.type) and not is_roof_like(o.type) and not is_ground(o)
    ]
    if not structures:
        return Vec3(0.0, 0.0, 0.0)
    if len(structures) == 1:
        s = structures[0]
        return Vec3(s.position.x + CONNECTION_SPACING, 0.0, s.position.z)

    avg_x = sum(o.position.x for o in structures) / len(structures)
    avg_z = sum(o.position.z for o in structures) / len(structures)
    if type_tag == "house-hallway":
        return Vec3(avg_x, 0.0, avg_z)
    max_x = max(o.position.x for o in structures)
    return Vec3(max_x + CONNECTION_SPACING, 0.0, avg_z)


def _has_coordinates(raw: dict) -> bool:
    return any(k in raw for k in ("x", "y", "z"))


def _enhance_relative(
    cmd: CommandRecord,
    raw: dict,
    reference: SceneObjectRef,
    scene: Sequence[SceneObjectRef],
    rng: random.Random | None,
) -> list[dict]:
    relation = SpatialRelation.parse(cmd.spatial_relation)

    # Rooms: hand "inside" over to the floor-placement action
    if is_room(reference) and relation is SpatialRelation.INSIDE:
        room_ref = reference.room_name or reference.id
        if cmd.action == "create":
            create = {"action": "create", "type": cmd.type, "color": cmd.color}
            place = {
                "action": "place-on-floor",
                "objectId": cmd.object_id or PENDING_OBJECT_ID,
                "relativeToObject": room_ref,
                "snapToGrid": True,
            }
            return [create, place]
        if cmd.action == "move" and cmd.object_id:
            return [{
                "action": "place-on-floor",
                "objectId": cmd.object_id,
                "relativeToObject": room_ref,
                "snapToGrid": True,
            }]
        return [raw]

    existing = [o for o in scene if cmd.object_id and o.id == cmd.object_id]
    if existing and cmd.action != "create":
        target = existing[0]
    else:
        target = hypothetical(cmd.type or "cube", cmd.scale or ONE)

    # Any other relation to a room stands the target at the room centre
    if is_room(reference):
        result = center_in_room(target, reference)
    else:
        result = resolve_placement(target, reference, relation, scene, rng=rng)

    primary = dict(raw)
    primary.update(vec3_to_xyz(result.position))
    primary["matchDimensions"] = result.match_dimensions
    primary["contactType"] = result.contact_type
    out = [primary]

    if result.scale is not None and cmd.action == "create":
        primary["scaleX"] = result.scale.x
        primary["scaleY"] = result.scale.y
        primary["scaleZ"] = result.scale.z
    elif result.scale is not None and cmd.action == "move" and cmd.object_id:
        out.append({
            "action": "scale",
            "objectId": cmd.object_id,
            "scaleX": result.scale.x,
            "scaleY": result.scale.y,
            "scaleZ": result.scale.z,
        })
    return out


def _enhance_housing(cmd: CommandRecord, raw: dict, scene: Sequence[SceneObjectRef]) -> dict:
    out = dict(raw)
    if is_roof_like(cmd.type):
        structure = find_roof_structure(scene)
        if structure is not None:
            result = roof_placement(cmd.type, structure)
            out.update(vec3_to_xyz(result.position))
            out["scaleX"] = result.scale.x
            out["scaleY"] = result.scale.y
            out["scaleZ"] = result.scale.z
            out["matchDimensions"] = True
            out["contactType"] = result.contact_type
    elif not _has_coordinates(raw):
        out.update(vec3_to_xyz(connection_position(scene, cmd.type)))

    if not cmd.color:
        out["color"] = HOUSING_COLORS.get(cmd.type, DEFAULT_HOUSING_COLOR)
    return out


def enhance_commands(
    commands: Sequence[dict],
    scene: Sequence[SceneObjectRef],
    *,
    rng: random.Random | None = None,
) -> list[dict]:
    """Resolve spatial relations in translated command dicts.

    Returns a new list; one input record may expand into two (create +
    place-on-floor, or move + scale).
    """
    enhanced: list[dict] = []
    for raw in commands:
        cmd = parse_command(raw)

        if cmd.action in PASSTHROUGH_ACTIONS:
            enhanced.append(raw)
            continue

        if (cmd.action in SPATIAL_ACTIONS
                and cmd.relative_to_object and cmd.spatial_relation):
            reference = find_object_by_description(cmd.relative_to_object, scene)
            if reference is None:
                log.warning("Reference %r not found, command left as-is",
                            cmd.relative_to_object)
                enhanced.append(raw)
                continue
            enhanced.extend(_enhance_relative(cmd, raw, reference, scene, rng))
            continue

        if cmd.action == "create" and cmd.type and is_house_like(cmd.type):
            enhanced.append(_enhance_housing(cmd, raw, scene))
            continue

        enhanced.append(raw)

    return enhanced
