"""Tests for room-relative queries.

Uses the fixture bedroom: a 200 × 200 px square centred on the 400 × 400
px canvas, 0.05 world units per pixel, so its floor spans world
x, z in [-5, 5] around the room position.
"""

from __future__ import annotations

import random
import unittest

from scenegeo.rooms import (
    drawing_to_world,
    find_containing_room,
    floor_y,
    is_position_in_room,
    point_in_polygon,
    random_position_in_room,
    room_center,
    snap_to_room_grid,
    world_to_drawing,
)
from scenegeo.scene.models import Vec3, GridInfo
from tests.scene_fixture import L_ROOM_POINTS, make_object, make_room


class _CornerRandom(random.Random):
    """Always samples the far corner of the bounding rectangle."""

    def uniform(self, a, b):
        return b


class TestTransforms(unittest.TestCase):

    def test_canvas_centre_is_room_position(self):
        room = make_room(position=Vec3(10.0, 1.25, -4.0))
        self.assertEqual(drawing_to_world((200.0, 200.0), room), (10.0, -4.0))
        self.assertEqual(world_to_drawing(Vec3(10.0, 0.0, -4.0), room), (200.0, 200.0))

    def test_scale(self):
        room = make_room()
        x, z = drawing_to_world((100.0, 300.0), room)
        self.assertAlmostEqual(x, -5.0)
        self.assertAlmostEqual(z, 5.0)

    def test_round_trip(self):
        room = make_room(position=Vec3(3.0, 0.0, 7.0))
        px, py = world_to_drawing(Vec3(1.5, 0.0, 9.25), room)
        x, z = drawing_to_world((px, py), room)
        self.assertAlmostEqual(x, 1.5)
        self.assertAlmostEqual(z, 9.25)

    def test_missing_bounds_default_to_400(self):
        room = make_room(grid_info=GridInfo(20.0, 0.05))
        self.assertEqual(drawing_to_world((200.0, 200.0), room), (0.0, 0.0))

    def test_no_grid_info(self):
        room = make_room(grid_info=None)
        self.assertIsNone(world_to_drawing(Vec3(0, 0, 0), room))
        self.assertIsNone(drawing_to_world((0.0, 0.0), room))


class TestFloor(unittest.TestCase):

    def test_floor_one_cell_below_room_bottom(self):
        self.assertAlmostEqual(floor_y(make_room()), -1.0)

    def test_floor_without_grid_info(self):
        self.assertAlmostEqual(floor_y(make_room(grid_info=None)), 0.0)

    def test_non_room_floor(self):
        self.assertEqual(floor_y(make_object("a", y=5.0)), 0.0)

    def test_room_center(self):
        room = make_room(position=Vec3(1.0, 2.0, 3.0))
        self.assertEqual(room_center(room), Vec3(1.0, 2.0, 3.0))


class TestRandomPosition(unittest.TestCase):

    def test_samples_stay_inside(self):
        room = make_room(points=L_ROOM_POINTS)
        rng = random.Random(1234)
        for _ in range(1000):
            pos = random_position_in_room(room, rng=rng)
            self.assertTrue(is_position_in_room(pos, room))
            self.assertAlmostEqual(pos.y, floor_y(room))

    def test_fallback_is_interior(self):
        room = make_room(points=L_ROOM_POINTS)
        with self.assertLogs("scenegeo.rooms.query", level="INFO"):
            pos = random_position_in_room(room, rng=_CornerRandom())
        self.assertTrue(is_position_in_room(pos, room))

    def test_room_without_outline_uses_centre(self):
        room = make_room(position=Vec3(2.0, 1.25, 2.0), points=None)
        self.assertEqual(random_position_in_room(room), Vec3(2.0, -1.0, 2.0))

    def test_room_without_grid_uses_centre(self):
        room = make_room(grid_info=None)
        self.assertEqual(random_position_in_room(room), Vec3(0.0, 0.0, 0.0))


class TestContainment(unittest.TestCase):

    def test_point_in_polygon(self):
        self.assertTrue(point_in_polygon((150.0, 150.0), L_ROOM_POINTS))
        self.assertFalse(point_in_polygon((250.0, 250.0), L_ROOM_POINTS))
        self.assertFalse(point_in_polygon((0.0, 0.0), L_ROOM_POINTS[:2]))

    def test_find_containing_room(self):
        kitchen = make_room("k", "Kitchen", position=Vec3(0.0, 1.25, 0.0))
        study = make_room("s", "Study", position=Vec3(20.0, 1.25, 0.0))
        scene = [make_object("cube-1"), kitchen, study]
        self.assertEqual(find_containing_room(Vec3(21.0, 0.0, 1.0), scene).id, "s")
        self.assertEqual(find_containing_room(Vec3(-2.0, 0.0, 0.0), scene).id, "k")
        self.assertIsNone(find_containing_room(Vec3(10.0, 0.0, 0.0), scene))


class TestSnapping(unittest.TestCase):

    def test_snaps_relative_to_room(self):
        room = make_room(position=Vec3(0.5, 1.25, 0.0))
        x, z = snap_to_room_grid(1.4, -2.6, room)
        self.assertAlmostEqual(x, 1.5)
        self.assertAlmostEqual(z, -3.0)

    def test_no_grid_info_unchanged(self):
        room = make_room(grid_info=None)
        self.assertEqual(snap_to_room_grid(1.4, -2.6, room), (1.4, -2.6))


if __name__ == "__main__":
    unittest.main()
