"""Dimension table and bounding boxes for scene objects."""

from __future__ import annotations

import logging
from types import MappingProxyType

from scenegeo.config import PLACEMENT_RULES
from scenegeo.scene.models import Vec3, SceneObjectRef, ONE

from .models import Dimensions, BoundingBox


log = logging.getLogger(__name__)


# ── Base dimensions per type tag (unscaled, world units) ───────────

UNIT_CUBE = Dimensions(1.0, 1.0, 1.0)

BASE_DIMENSIONS = MappingProxyType({
    # Primitives
    "cube":                   Dimensions(2.0, 2.0, 2.0),
    "sphere":                 Dimensions(2.0, 2.0, 2.0),
    "cylinder":               Dimensions(2.0, 2.0, 2.0),
    "plane":                  Dimensions(2.0, 0.1, 2.0),
    "torus":                  Dimensions(2.0, 0.5, 2.0),
    "cone":                   Dimensions(2.0, 2.0, 2.0),
    # Housing structures
    "house-basic":            Dimensions(2.0, 2.0, 1.5),
    "house-room":             Dimensions(2.0, 1.5, 2.0),
    "house-hallway":          Dimensions(1.0, 1.5, 3.0),
    "house-roof-flat":        Dimensions(2.0, 0.1, 1.5),
    "house-roof-pitched":     Dimensions(2.0, 0.8, 1.5),
    "house-room-modular":     Dimensions(4.0, 2.5, 4.0),
    "house-wall":             Dimensions(4.0, 1.5, 0.2),
    "house-ceiling":          Dimensions(4.0, 0.1, 4.0),
    "house-floor":            Dimensions(4.0, 0.1, 4.0),
    # Doors
    "house-door-single":      Dimensions(0.9, 2.0, 0.05),
    "house-door-double":      Dimensions(1.8, 2.0, 0.05),
    "house-door-sliding":     Dimensions(1.2, 2.0, 0.05),
    "house-door-french":      Dimensions(1.2, 2.0, 0.05),
    "house-door-garage":      Dimensions(2.4, 2.0, 0.05),
    # Windows
    "house-window-single":    Dimensions(0.6, 0.8, 0.05),
    "house-window-double":    Dimensions(1.2, 0.8, 0.05),
    "house-window-bay":       Dimensions(1.5, 0.8, 0.3),
    "house-window-casement":  Dimensions(0.8, 1.0, 0.05),
    "house-window-sliding":   Dimensions(1.2, 0.8, 0.05),
    "house-window-skylight":  Dimensions(0.8, 0.8, 0.05),
    # Scene furniture
    "ground":                 Dimensions(10.0, 1.0, 10.0),
    PLACEMENT_RULES.room_type: Dimensions(4.0, PLACEMENT_RULES.room_base_height, 4.0),
})


# ── Type predicates ────────────────────────────────────────────────


def is_house_like(type_tag: str) -> bool:
    return type_tag.startswith("house-")


def is_roof_like(type_tag: str) -> bool:
    return "roof" in type_tag


def is_room(obj: SceneObjectRef) -> bool:
    return obj.type == PLACEMENT_RULES.room_type


def is_ground(obj: SceneObjectRef) -> bool:
    return obj.type in PLACEMENT_RULES.ground_types


# ── Lookups ────────────────────────────────────────────────────────


def dimensions(type_tag: str, scale: Vec3 = ONE) -> Dimensions:
    """World dimensions for a type tag at a given per-axis scale.

    Unrecognized tags are treated as a unit cube.
    """
    base = BASE_DIMENSIONS.get(type_tag)
    if base is None:
        log.debug("Unknown type %r, using unit cube", type_tag)
        base = UNIT_CUBE
    return base.scaled(scale)


def object_dimensions(obj: SceneObjectRef) -> Dimensions:
    return dimensions(obj.type, obj.scale)


def bounding_box_at(center: Vec3, dims: Dimensions) -> BoundingBox:
    """AABB of a box with *dims* centred on *center*.

    Half-extents use absolute values so a mirrored (negative) scale never
    yields max < min.
    """
    hw = abs(dims.width) / 2
    hh = abs(dims.height) / 2
    hd = abs(dims.depth) / 2
    return BoundingBox(
        min=Vec3(center.x - hw, center.y - hh, center.z - hd),
        max=Vec3(center.x + hw, center.y + hh, center.z + hd),
    )


def bounding_box(obj: SceneObjectRef) -> BoundingBox:
    """AABB of a scene object.  The object's rotation is ignored."""
    return bounding_box_at(obj.position, object_dimensions(obj))


def aabb_overlap(a: BoundingBox, b: BoundingBox) -> bool:
    """Inclusive slab test on all three axes (touching faces overlap)."""
    return (
        a.min.x <= b.max.x and a.max.x >= b.min.x
        and a.min.y <= b.max.y and a.max.y >= b.min.y
        and a.min.z <= b.max.z and a.max.z >= b.min.z
    )


def intersection_volume(a: BoundingBox, b: BoundingBox) -> float:
    """Volume of the overlap of two AABBs (0 when disjoint or touching)."""
    ox = max(0.0, min(a.max.x, b.max.x) - max(a.min.x, b.min.x))
    oy = max(0.0, min(a.max.y, b.max.y) - max(a.min.y, b.min.y))
    oz = max(0.0, min(a.max.z, b.max.z) - max(a.min.z, b.min.z))
    return ox * oy * oz
