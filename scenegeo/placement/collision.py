"""Collision resolution — nudge a candidate position until it is clear.

The search is a bounded ring sweep around the candidate:

  radius   0.1 → 5.0 in 0.1 steps
  angle    16 directions per ring
  height   0, +h/2, −h/2 (h = target height)

The first ring holding any free sample wins, and within it the sample
closest to the candidate.  When every ring is blocked the target is put
flush against the first obstacle instead, so a position is always
returned.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from scenegeo.config import PLACEMENT_RULES
from scenegeo.scene.models import Vec3, SceneObjectRef

from .dimensions import (
    bounding_box, bounding_box_at, object_dimensions,
    aabb_overlap, intersection_volume, is_ground,
)
from .models import Dimensions, CollisionResolution


log = logging.getLogger(__name__)


def find_collisions(
    position: Vec3,
    dims: Dimensions,
    scene: Sequence[SceneObjectRef],
    *,
    exclude_id: str | None = None,
) -> list[SceneObjectRef]:
    """Scene objects whose AABB overlaps a box of *dims* at *position*.

    Ground-plane objects and *exclude_id* are skipped.  Results are
    ordered by intersection volume, largest first.
    """
    box = bounding_box_at(position, dims)
    hits: list[tuple[float, SceneObjectRef]] = []
    for obj in scene:
        if obj.id == exclude_id or is_ground(obj):
            continue
        other = bounding_box(obj)
        if aabb_overlap(box, other):
            hits.append((intersection_volume(box, other), obj))
    # Stable sort keeps scene order among equal volumes
    hits.sort(key=lambda h: -h[0])
    return [obj for _, obj in hits]


def _is_free(
    position: Vec3,
    dims: Dimensions,
    scene: Sequence[SceneObjectRef],
    exclude_id: str | None,
) -> bool:
    box = bounding_box_at(position, dims)
    for obj in scene:
        if obj.id == exclude_id or is_ground(obj):
            continue
        if aabb_overlap(box, bounding_box(obj)):
            return False
    return True


def _spiral_search(
    candidate: Vec3,
    dims: Dimensions,
    scene: Sequence[SceneObjectRef],
    exclude_id: str | None,
) -> tuple[Vec3 | None, int]:
    """Return (nearest free position or None, samples tested)."""
    rules = PLACEMENT_RULES
    half_h = dims.height / 2
    height_offsets = (0.0, half_h, -half_h)
    tested = 0

    for ring in range(1, rules.search_rings + 1):
        d = ring * rules.search_step
        best: Vec3 | None = None
        best_dist = math.inf
        for k in range(rules.search_angles):
            theta = 2 * math.pi * k / rules.search_angles
            dx = d * math.cos(theta)
            dz = d * math.sin(theta)
            for dy in height_offsets:
                tested += 1
                pt = Vec3(candidate.x + dx, candidate.y + dy, candidate.z + dz)
                if not _is_free(pt, dims, scene, exclude_id):
                    continue
                dist = math.sqrt(dx * dx + dy * dy + dz * dz)
                if dist < best_dist:
                    best, best_dist = pt, dist
        if best is not None:
            return best, tested

    return None, tested


def _flush_against(
    candidate: Vec3,
    dims: Dimensions,
    obstacle: SceneObjectRef,
) -> Vec3:
    """Put the target flush against *obstacle* on the dominant XZ axis.

    The face is chosen from the side of the obstacle's centre the
    candidate lies on; the other two coordinates are preserved.
    """
    box = bounding_box(obstacle)
    dx = candidate.x - obstacle.position.x
    dz = candidate.z - obstacle.position.z

    if abs(dx) >= abs(dz):
        if dx >= 0:
            x = box.max.x + dims.width / 2
        else:
            x = box.min.x - dims.width / 2
        return Vec3(x, candidate.y, candidate.z)

    if dz >= 0:
        z = box.max.z + dims.depth / 2
    else:
        z = box.min.z - dims.depth / 2
    return Vec3(candidate.x, candidate.y, z)


# ── Main entry points ─────────────────────────────────────────────


def resolve_collision_detailed(
    candidate: Vec3,
    dims: Dimensions,
    scene: Sequence[SceneObjectRef],
    *,
    exclude_id: str | None = None,
    expected_contact: SceneObjectRef | None = None,
) -> CollisionResolution:
    """Find the nearest collision-free position for a box of *dims*.

    Parameters
    ----------
    candidate : Vec3
        Proposed centre (usually a :class:`PlacementResult` position).
    dims : Dimensions
        Target size, already scaled.
    scene : sequence of SceneObjectRef
        Obstacles.  Never modified.
    exclude_id : str, optional
        The target's own id when it already exists in *scene*.
    expected_contact : SceneObjectRef, optional
        The placement reference.  Touching it alone is not a collision.

    Returns
    -------
    CollisionResolution
    """
    collisions = find_collisions(candidate, dims, scene, exclude_id=exclude_id)
    ids = tuple(o.id for o in collisions)

    if not collisions:
        return CollisionResolution(candidate, "clear", positions_tested=1)

    if (len(collisions) == 1 and expected_contact is not None
            and collisions[0].id == expected_contact.id):
        return CollisionResolution(
            candidate, "expected-contact", collided_ids=ids, positions_tested=1,
        )

    found, tested = _spiral_search(candidate, dims, scene, exclude_id)
    if found is not None:
        log.debug(
            "Collision with %s resolved by spiral search → (%.2f, %.2f, %.2f) "
            "after %d samples",
            ", ".join(ids), found.x, found.y, found.z, tested,
        )
        return CollisionResolution(found, "spiral", collided_ids=ids,
                                   positions_tested=tested + 1)

    flush = _flush_against(candidate, dims, collisions[0])
    log.info(
        "Spiral search exhausted (%d samples), placing flush against %s",
        tested, collisions[0].id,
    )
    return CollisionResolution(flush, "flush", collided_ids=ids,
                               positions_tested=tested + 1)


def resolve_collision(
    candidate: Vec3,
    dims: Dimensions,
    scene: Sequence[SceneObjectRef],
    *,
    exclude_id: str | None = None,
    expected_contact: SceneObjectRef | None = None,
) -> Vec3:
    """Position-only form of :func:`resolve_collision_detailed`."""
    return resolve_collision_detailed(
        candidate, dims, scene,
        exclude_id=exclude_id, expected_contact=expected_contact,
    ).position


def resolve_object_collision(
    obj: SceneObjectRef,
    scene: Sequence[SceneObjectRef],
    *,
    expected_contact: SceneObjectRef | None = None,
) -> Vec3:
    """Resolve an existing scene object against the rest of the scene."""
    return resolve_collision(
        obj.position, object_dimensions(obj), scene,
        exclude_id=obj.id, expected_contact=expected_contact,
    )
