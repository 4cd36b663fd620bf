"""Spatial placement — turn (target, reference, relation) into coordinates.

Positions are computed from the reference's AABB so the target touches
it with zero gap on one axis ("direct contact").  Some relations also
rescale the target to the reference's footprint (dimension matching).
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from scenegeo.config import PLACEMENT_RULES
from scenegeo.rooms.query import (
    random_position_in_room, room_center, floor_y, snap_to_room_grid,
)
from scenegeo.scene.models import Vec3, SceneObjectRef, ONE

from .dimensions import (
    dimensions, object_dimensions, bounding_box,
    is_house_like, is_roof_like, is_room, is_ground,
)
from .models import Dimensions, SpatialRelation, PlacementResult


log = logging.getLogger(__name__)


def hypothetical(type_tag: str, scale: Vec3 = ONE, object_id: str = "temp") -> SceneObjectRef:
    """A not-yet-created target object for placement queries."""
    return SceneObjectRef(id=object_id, type=type_tag, scale=scale)


# ── Dimension matching ─────────────────────────────────────────────


def should_match_dimensions(
    target: SceneObjectRef,
    reference: SceneObjectRef,
    relation: SpatialRelation | None,
) -> bool:
    """Fixed rule table deciding whether the target adopts the
    reference's footprint."""
    # Roofs cover any house structure
    if is_roof_like(target.type) and is_house_like(reference.type):
        return True

    # Primitives stacked on primitives
    if (relation is SpatialRelation.ON_TOP_OF
            and not is_house_like(target.type)
            and not is_house_like(reference.type)):
        return True

    # Round objects on a cube take the cube's footprint
    if (relation is SpatialRelation.ON_TOP_OF
            and reference.type == "cube"
            and target.type in ("sphere", "cylinder")):
        return True

    return False


def _ratio(ref: float, tgt: float) -> float:
    return ref / tgt if tgt else 1.0


def dimension_matching_scale(
    target: SceneObjectRef,
    reference: SceneObjectRef,
    relation: SpatialRelation | None,
) -> Vec3:
    """Scale factors that give the target the reference's footprint.

    Roofs and on-top-of placements keep their own height (y = 1); every
    other matching case takes all three reference dimensions.
    """
    ref = object_dimensions(reference)
    tgt = object_dimensions(target)

    if is_roof_like(target.type):
        return Vec3(_ratio(ref.width, tgt.width), 1.0, _ratio(ref.depth, tgt.depth))

    if relation is SpatialRelation.ON_TOP_OF:
        return Vec3(_ratio(ref.width, tgt.width), 1.0, _ratio(ref.depth, tgt.depth))

    return Vec3(
        _ratio(ref.width, tgt.width),
        _ratio(ref.height, tgt.height),
        _ratio(ref.depth, tgt.depth),
    )


# ── Contact positions ──────────────────────────────────────────────


def contact_position(
    reference: SceneObjectRef,
    dims: Dimensions,
    relation: SpatialRelation | None,
    rng: random.Random | None = None,
) -> Vec3:
    """Centre position for a target of size *dims* in direct contact
    with *reference* according to *relation*.

    ``beside`` always uses the reference's +X face.  ``inside`` only
    means something for rooms; for anything else, and for unrecognized
    relations, the reference position is returned unchanged.
    """
    ref_pos = reference.position
    box = bounding_box(reference)

    if relation is SpatialRelation.ON_TOP_OF:
        return Vec3(ref_pos.x, box.max.y + dims.height / 2, ref_pos.z)

    if relation is SpatialRelation.ABOVE:
        return Vec3(
            ref_pos.x,
            box.max.y + dims.height / 2 + PLACEMENT_RULES.above_gap,
            ref_pos.z,
        )

    if relation is SpatialRelation.BELOW:
        return Vec3(ref_pos.x, box.min.y - dims.height / 2, ref_pos.z)

    if relation is SpatialRelation.BESIDE:
        return Vec3(box.max.x + dims.width / 2, ref_pos.y, ref_pos.z)

    if relation is SpatialRelation.IN_FRONT_OF:
        return Vec3(ref_pos.x, ref_pos.y, box.max.z + dims.depth / 2)

    if relation is SpatialRelation.BEHIND:
        return Vec3(ref_pos.x, ref_pos.y, box.min.z - dims.depth / 2)

    if relation is SpatialRelation.INSIDE:
        if is_room(reference):
            spot = random_position_in_room(reference, rng=rng)
            return Vec3(spot.x, spot.y + dims.height / 2, spot.z)
        return ref_pos

    log.warning("Unrecognized relation %r, keeping reference position", relation)
    return ref_pos


# ── Main entry point ───────────────────────────────────────────────


def resolve_placement(
    target: SceneObjectRef,
    reference: SceneObjectRef,
    relation: SpatialRelation | str | None,
    scene: Sequence[SceneObjectRef] = (),
    *,
    rng: random.Random | None = None,
) -> PlacementResult:
    """Compute where *target* goes to stand in *relation* to *reference*.

    Parameters
    ----------
    target : SceneObjectRef
        The object being placed (existing, or built with
        :func:`hypothetical`).  Only its type and scale are read.
    reference : SceneObjectRef
        The object the relation is anchored on.
    relation : SpatialRelation | str
        Relation enum or translator string ("on-top-of", "next-to", ...).
    scene : sequence of SceneObjectRef
        Full scene snapshot.  Used for dimension lookups only.
    rng : random.Random, optional
        Source of randomness for ``inside`` placements in rooms.

    Returns
    -------
    PlacementResult
        Position, the absolute target scale when the footprint was
        matched (position and scale describe the same box), and the
        match flag.
    """
    rel = SpatialRelation.parse(relation)
    match = should_match_dimensions(target, reference, rel)
    dims = object_dimensions(target)

    scale = None
    if match:
        # Absolute scale: the target's own scale times the matching factors
        factors = dimension_matching_scale(target, reference, rel)
        scale = Vec3(
            target.scale.x * factors.x,
            target.scale.y * factors.y,
            target.scale.z * factors.z,
        )
        dims = dimensions(target.type, scale)

    position = contact_position(reference, dims, rel, rng=rng)
    log.debug(
        "Placed %s %s %s at (%.3f, %.3f, %.3f) match=%s (scene of %d)",
        target.type, rel.value if rel else relation, reference.id,
        position.x, position.y, position.z, match, len(scene),
    )
    return PlacementResult(position=position, scale=scale, match_dimensions=match)


# ── Room floor placement ───────────────────────────────────────────


def place_on_floor(
    target: SceneObjectRef,
    room: SceneObjectRef,
    *,
    snap_to_grid: bool = True,
    rng: random.Random | None = None,
) -> PlacementResult:
    """Stand *target* on a room's floor at a random interior spot.

    With *snap_to_grid* the spot is rounded to the room's drawing grid
    (when the room has one).  The bottom of the target rests on the
    floor.
    """
    dims = object_dimensions(target)
    spot = random_position_in_room(room, rng=rng)
    x, z = spot.x, spot.z
    if snap_to_grid:
        x, z = snap_to_room_grid(x, z, room)
    return PlacementResult(
        position=Vec3(x, floor_y(room) + dims.height / 2, z),
    )


def center_in_room(target: SceneObjectRef, room: SceneObjectRef) -> PlacementResult:
    """Stand *target* on the floor at the room's centre."""
    dims = object_dimensions(target)
    c = room_center(room)
    return PlacementResult(position=Vec3(c.x, floor_y(room) + dims.height / 2, c.z))


# ── Roofs ──────────────────────────────────────────────────────────


def find_roof_structure(scene: Sequence[SceneObjectRef]) -> SceneObjectRef | None:
    """Best structure to roof: a room, then a basic house, then any
    other non-roof house structure."""
    structures = [
        o for o in scene
        if is_house_like(o.type) and not is_roof_like(o.type) and not is_ground(o)
    ]
    for preferred in ("house-room", "house-basic"):
        for o in structures:
            if o.type == preferred:
                return o
    return structures[0] if structures else None


def roof_placement(roof_type: str, structure: SceneObjectRef) -> PlacementResult:
    """Footprint-matched roof resting flush on *structure*.

    The roof keeps its own height; width and depth follow the structure.
    """
    base = dimensions(roof_type)
    ref = object_dimensions(structure)
    scale = Vec3(_ratio(ref.width, base.width), 1.0, _ratio(ref.depth, base.depth))
    box = bounding_box(structure)
    position = Vec3(
        structure.position.x,
        box.max.y + base.height * scale.y / 2,
        structure.position.z,
    )
    return PlacementResult(position=position, scale=scale, match_dimensions=True)
