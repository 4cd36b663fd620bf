"""Reference resolution — map a free-text description to a scene object.

The command translator names reference objects loosely ("the red cube",
"bedroom", "cube-3").  Matching runs in priority order and a stage only
wins when it is unambiguous:

  1. room name      (custom rooms, substring either way)
  2. color name     (palette hex → name)
  3. type tag       (substring either way; "room" matches any custom room)
  4. object id      (first substring match either way)
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Sequence

from scenegeo.config import PLACEMENT_RULES

from .models import SceneObjectRef


log = logging.getLogger(__name__)


# Editor palette: hex values the UI assigns, by human-readable name.
COLOR_NAMES = MappingProxyType({
    "#ff6b6b": "red",
    "#4ecdc4": "blue",
    "#95e1d3": "green",
    "#fce38a": "yellow",
    "#a8e6cf": "purple",
    "#ffb347": "orange",
    "#ff8fab": "pink",
    "#87ceeb": "cyan",
    "#808080": "gray",
    "#8b4513": "brown",
    "#deb887": "tan",
    "#654321": "dark brown",
})


def color_name(hex_color: str | None) -> str:
    """Human-readable palette name, or ``"unknown"``."""
    if not hex_color:
        return "unknown"
    return COLOR_NAMES.get(hex_color.lower(), "unknown")


def _either_contains(a: str, b: str) -> bool:
    return a in b or b in a


def find_object_by_description(
    description: str,
    scene: Sequence[SceneObjectRef],
) -> SceneObjectRef | None:
    """Resolve *description* to a single scene object, or None."""
    desc = description.strip().lower()
    if not desc:
        return None
    room_type = PLACEMENT_RULES.room_type

    rooms = [
        o for o in scene
        if o.type == room_type and o.room_name
        and _either_contains(o.room_name.lower(), desc)
    ]
    if len(rooms) == 1:
        return rooms[0]

    by_color = [
        o for o in scene
        if o.color and color_name(o.color) != "unknown"
        and _either_contains(color_name(o.color), desc)
    ]
    if len(by_color) == 1:
        return by_color[0]

    by_type = [
        o for o in scene
        if _either_contains(o.type.lower(), desc)
        or (o.type == room_type and "room" in desc)
    ]
    if len(by_type) == 1:
        return by_type[0]

    for o in scene:
        if _either_contains(o.id.lower(), desc):
            return o

    log.debug("No unambiguous match for %r among %d objects", description, len(scene))
    return None
