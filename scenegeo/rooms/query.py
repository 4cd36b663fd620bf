"""Room spatial queries — containment, coordinate transforms, sampling.

A room object stores its outline in drawing pixels (``room_points``) and
the grid metadata needed to map them into the world::

    world_x = room.x + (drawing_x - width / 2)  * world_scale
    world_z = room.z + (drawing_y - height / 2) * world_scale

Drawing y maps to world z; the canvas centre sits on the room position.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from scenegeo.config import PLACEMENT_RULES
from scenegeo.geometry.polygon import (
    point_in_polygon as _point_in_outline,
    polygon_bounds,
    polygon_centroid,
)
from scenegeo.scene.models import Vec3, SceneObjectRef


log = logging.getLogger(__name__)


def point_in_polygon(point: tuple[float, float], polygon: Sequence[tuple[float, float]]) -> bool:
    """Ray-casting parity test; polygons with fewer than 3 points contain nothing."""
    return _point_in_outline(point[0], point[1], polygon)


def _is_room(obj: SceneObjectRef) -> bool:
    return obj.type == PLACEMENT_RULES.room_type


def _canvas_centre(room: SceneObjectRef) -> tuple[float, float]:
    bounds = room.grid_info.drawing_bounds or PLACEMENT_RULES.default_drawing_bounds
    return bounds[0] / 2, bounds[1] / 2


# ── Coordinate transforms ─────────────────────────────────────────


def world_to_drawing(pos: Vec3, room: SceneObjectRef) -> tuple[float, float] | None:
    """World position → drawing pixels, or None without grid info."""
    if room.grid_info is None:
        return None
    scale = room.grid_info.world_scale
    cx, cy = _canvas_centre(room)
    return (
        (pos.x - room.position.x) / scale + cx,
        (pos.z - room.position.z) / scale + cy,
    )


def drawing_to_world(point: tuple[float, float], room: SceneObjectRef) -> tuple[float, float] | None:
    """Drawing pixels → world (x, z), or None without grid info."""
    if room.grid_info is None:
        return None
    scale = room.grid_info.world_scale
    cx, cy = _canvas_centre(room)
    return (
        (point[0] - cx) * scale + room.position.x,
        (point[1] - cy) * scale + room.position.z,
    )


# ── Room geometry ─────────────────────────────────────────────────


def room_center(room: SceneObjectRef) -> Vec3:
    """Rooms are drawn centred on their position."""
    return room.position


def floor_y(room: SceneObjectRef) -> float:
    """World height of a room's floor.

    The room bottom (``position.y`` minus half the scaled room height),
    lowered by one grid cell when the room has grid metadata.  Objects
    that are not rooms have their floor at 0.
    """
    if not _is_room(room):
        return 0.0
    bottom = room.position.y - PLACEMENT_RULES.room_base_height * room.scale.y / 2
    if room.grid_info is not None:
        return bottom - room.grid_info.cell_world_size
    return bottom


def random_position_in_room(
    room: SceneObjectRef,
    rng: random.Random | None = None,
) -> Vec3:
    """Random point on a room's floor, inside its outline.

    Rejection-samples the outline's bounding rectangle.  When every
    attempt misses, falls back to an interior point of the outline.
    Rooms without an outline or grid info yield their centre.  The
    returned y is the floor height.
    """
    rng = rng or random.Random()
    y = floor_y(room)
    points = room.room_points
    if room.grid_info is None or not points or len(points) < 3:
        c = room_center(room)
        return Vec3(c.x, y, c.z)

    min_x, min_y, max_x, max_y = polygon_bounds(points)
    for _ in range(PLACEMENT_RULES.room_sample_attempts):
        sample = (rng.uniform(min_x, max_x), rng.uniform(min_y, max_y))
        if point_in_polygon(sample, points):
            wx, wz = drawing_to_world(sample, room)
            return Vec3(wx, y, wz)

    log.info("No random sample landed inside room %s after %d attempts, "
             "using interior point", room.id, PLACEMENT_RULES.room_sample_attempts)
    wx, wz = drawing_to_world(polygon_centroid(points), room)
    return Vec3(wx, y, wz)


def is_position_in_room(pos: Vec3, room: SceneObjectRef) -> bool:
    """Whether a world position lies inside a room's drawn outline."""
    if not room.room_points or len(room.room_points) < 3:
        return False
    drawing = world_to_drawing(pos, room)
    if drawing is None:
        return False
    return point_in_polygon(drawing, room.room_points)


def find_containing_room(pos: Vec3, scene: Sequence[SceneObjectRef]) -> SceneObjectRef | None:
    """First room in *scene* whose outline contains *pos*."""
    for obj in scene:
        if _is_room(obj) and is_position_in_room(pos, obj):
            return obj
    return None


def snap_to_room_grid(x: float, z: float, room: SceneObjectRef) -> tuple[float, float]:
    """Round (x, z) to the nearest grid line of the room's drawing grid.

    Offsets are measured from the room position.  Rooms without grid
    info return the input unchanged.
    """
    if room.grid_info is None:
        return x, z
    cell = room.grid_info.cell_world_size
    ox, oz = room.position.x, room.position.z
    return (
        round((x - ox) / cell) * cell + ox,
        round((z - oz) / cell) * cell + oz,
    )
