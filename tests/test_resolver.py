"""Tests for the spatial placement resolver.

Validates:
  - Contact positions for every relation (zero gap, above gap 0.2)
  - Dimension matching rules and scale factors
  - Unrecognized relations fall back to the reference position
  - Room-aware placement (inside, place_on_floor, center_in_room)
  - Roof placement on house structures
"""

from __future__ import annotations

import random
import unittest

from scenegeo.placement import (
    SpatialRelation,
    bounding_box,
    dimension_matching_scale,
    hypothetical,
    place_on_floor,
    center_in_room,
    resolve_placement,
    should_match_dimensions,
    find_roof_structure,
    roof_placement,
)
from scenegeo.placement.dimensions import (
    BASE_DIMENSIONS, bounding_box_at, dimensions, object_dimensions,
)
from scenegeo.rooms.query import floor_y, is_position_in_room
from scenegeo.scene.models import ONE, Vec3
from tests.scene_fixture import make_object, make_room


class TestContactPositions(unittest.TestCase):

    def test_sphere_on_top_of_cube(self):
        """Sphere on a cube at the origin: y = 1.0 (ref top) + 1.0 (half height)."""
        ref = make_object("a")
        result = resolve_placement(hypothetical("sphere"), ref, "on-top-of")
        self.assertEqual(result.position, Vec3(0.0, 2.0, 0.0))
        self.assertTrue(result.match_dimensions)
        self.assertEqual(result.scale, Vec3(1.0, 1.0, 1.0))
        self.assertEqual(result.contact_type, "direct")

    def test_beside_uses_positive_x_face(self):
        ref = make_object("a", x=3.0)
        target = hypothetical("sphere")
        result = resolve_placement(target, ref, SpatialRelation.BESIDE)
        w = object_dimensions(target).width
        self.assertAlmostEqual(result.position.x, 4.0 + w / 2)
        self.assertEqual(result.position.y, 0.0)
        self.assertEqual(result.position.z, 0.0)
        self.assertFalse(result.match_dimensions)
        self.assertIsNone(result.scale)

    def test_beside_touches_reference(self):
        ref = make_object("a", x=3.0)
        result = resolve_placement(hypothetical("cube"), ref, "beside")
        placed = make_object("t", x=result.position.x)
        self.assertAlmostEqual(bounding_box(placed).min.x, bounding_box(ref).max.x)

    def test_next_to_is_beside(self):
        ref = make_object("a")
        a = resolve_placement(hypothetical("cube"), ref, "next to")
        b = resolve_placement(hypothetical("cube"), ref, "beside")
        self.assertEqual(a, b)

    def test_above_leaves_gap(self):
        ref = make_object("a")
        result = resolve_placement(hypothetical("cube"), ref, "above")
        self.assertAlmostEqual(result.position.y, 2.2)
        self.assertFalse(result.match_dimensions)

    def test_below(self):
        ref = make_object("a")
        result = resolve_placement(hypothetical("cube"), ref, "below")
        self.assertAlmostEqual(result.position.y, -2.0)

    def test_in_front_of_and_behind(self):
        ref = make_object("a", z=1.0)
        front = resolve_placement(hypothetical("cube"), ref, "in-front-of")
        behind = resolve_placement(hypothetical("cube"), ref, "behind")
        self.assertAlmostEqual(front.position.z, 3.0)
        self.assertAlmostEqual(behind.position.z, -1.0)
        self.assertEqual(front.position.x, 0.0)

    def test_unrecognized_relation_keeps_reference_position(self):
        ref = make_object("a", x=1.0, y=2.0, z=3.0)
        with self.assertLogs("scenegeo.placement.resolver", level="WARNING"):
            result = resolve_placement(hypothetical("cube"), ref, "diagonally-across")
        self.assertEqual(result.position, Vec3(1.0, 2.0, 3.0))
        self.assertFalse(result.match_dimensions)

    def test_inside_non_room_returns_reference_position(self):
        ref = make_object("a", x=1.0, y=0.0, z=-1.0)
        result = resolve_placement(hypothetical("sphere"), ref, "inside")
        self.assertEqual(result.position, Vec3(1.0, 0.0, -1.0))

    def test_scaled_reference_top_matches_target_bottom(self):
        ref = make_object("a", x=0.0, y=1.0, z=0.0, scale=Vec3(2.0, 1.5, 3.0))
        target = hypothetical("sphere")
        result = resolve_placement(target, ref, "on-top-of")
        self.assertEqual(result.scale, Vec3(2.0, 1.0, 3.0))
        dims = object_dimensions(target).scaled(result.scale)
        bottom = result.position.y - dims.height / 2
        self.assertAlmostEqual(bottom, bounding_box(ref).max.y)

    def test_prescaled_target_keeps_own_height(self):
        ref = make_object("a")
        target = hypothetical("sphere", Vec3(2.0, 3.0, 2.0))
        result = resolve_placement(target, ref, "on-top-of")
        self.assertEqual(result.scale, Vec3(1.0, 3.0, 1.0))
        self.assertAlmostEqual(result.position.y, 4.0)

    def _placed_box(self, target, result):
        dims = dimensions(target.type, result.scale or target.scale)
        return bounding_box_at(result.position, dims)

    def test_contact_holds_for_every_type_and_scale(self):
        references = [
            make_object("c", "cube", 1.0, 0.5, -2.0, scale=Vec3(1.5, 0.5, 2.0)),
            make_object("h", "house-basic", -3.0, 0.0, 1.0),
        ]
        for type_tag in BASE_DIMENSIONS:
            for scale in (ONE, Vec3(0.5, 2.0, 1.5)):
                target = hypothetical(type_tag, scale)
                for ref in references:
                    with self.subTest(type=type_tag, scale=scale, ref=ref.id):
                        top = bounding_box(ref).max.y
                        right = bounding_box(ref).max.x

                        result = resolve_placement(target, ref, "on-top-of")
                        self.assertAlmostEqual(
                            self._placed_box(target, result).min.y, top)

                        result = resolve_placement(target, ref, "above")
                        self.assertAlmostEqual(
                            self._placed_box(target, result).min.y, top + 0.2)

                        result = resolve_placement(target, ref, "beside")
                        self.assertAlmostEqual(
                            self._placed_box(target, result).min.x, right)
                        self.assertEqual(result.position.y, ref.position.y)
                        self.assertEqual(result.position.z, ref.position.z)


class TestDimensionMatching(unittest.TestCase):

    def test_primitives_on_top_match(self):
        self.assertTrue(should_match_dimensions(
            hypothetical("cone"), make_object("a", "cylinder"), SpatialRelation.ON_TOP_OF))

    def test_beside_does_not_match(self):
        self.assertFalse(should_match_dimensions(
            hypothetical("cube"), make_object("a"), SpatialRelation.BESIDE))

    def test_housing_on_top_does_not_match(self):
        self.assertFalse(should_match_dimensions(
            hypothetical("house-room"), make_object("a", "house-basic"),
            SpatialRelation.ON_TOP_OF))

    def test_roof_matches_any_house_relation(self):
        self.assertTrue(should_match_dimensions(
            hypothetical("house-roof-pitched"), make_object("a", "house-basic"), None))

    def test_roof_keeps_own_height(self):
        scale = dimension_matching_scale(
            hypothetical("house-roof-flat"), make_object("h", "house-room"),
            SpatialRelation.BESIDE)
        self.assertEqual(scale, Vec3(1.0, 1.0, 2.0 / 1.5))

    def test_other_relations_match_all_axes(self):
        scale = dimension_matching_scale(
            hypothetical("cube"), make_object("h", "house-basic"),
            SpatialRelation.BESIDE)
        self.assertEqual(scale, Vec3(1.0, 1.0, 0.75))

    def test_zero_target_dimension_gives_unit_ratio(self):
        target = hypothetical("cube", Vec3(0.0, 1.0, 1.0))
        scale = dimension_matching_scale(
            target, make_object("a", scale=Vec3(2.0, 1.0, 1.0)), SpatialRelation.ON_TOP_OF)
        self.assertEqual(scale.x, 1.0)


class TestRoomPlacement(unittest.TestCase):

    def test_inside_room_lands_on_floor_within_outline(self):
        room = make_room()
        rng = random.Random(7)
        for _ in range(50):
            result = resolve_placement(hypothetical("cube"), room, "inside", rng=rng)
            self.assertAlmostEqual(result.position.y, floor_y(room) + 1.0)
            self.assertTrue(is_position_in_room(result.position, room))

    def test_place_on_floor_snaps_to_grid(self):
        room = make_room()
        result = place_on_floor(hypothetical("cube"), room, rng=random.Random(3))
        self.assertAlmostEqual(result.position.x, round(result.position.x))
        self.assertAlmostEqual(result.position.z, round(result.position.z))
        self.assertAlmostEqual(result.position.y, 0.0)

    def test_center_in_room(self):
        room = make_room(position=Vec3(4.0, 1.25, -2.0))
        result = center_in_room(hypothetical("sphere"), room)
        self.assertEqual(result.position, Vec3(4.0, 0.0, -2.0))


class TestRoofs(unittest.TestCase):

    def test_roof_prefers_room_structures(self):
        scene = [
            make_object("h1", "house-basic"),
            make_object("r1", "house-room", x=3.0),
            make_object("roof", "house-roof-flat", y=5.0),
        ]
        self.assertEqual(find_roof_structure(scene).id, "r1")

    def test_no_structure(self):
        self.assertIsNone(find_roof_structure([make_object("a")]))

    def test_roof_height_preserved_for_scaled_house(self):
        house = make_object("h1", "house-basic", scale=Vec3(2.0, 3.0, 0.5))
        for relation in ("on-top-of", "above", "beside"):
            result = resolve_placement(hypothetical("house-roof-pitched"), house, relation)
            self.assertTrue(result.match_dimensions)
            self.assertEqual(result.scale, Vec3(2.0, 1.0, 0.5))
            tall = resolve_placement(
                hypothetical("house-roof-pitched", Vec3(1.0, 4.0, 1.0)), house, relation)
            self.assertEqual(tall.scale, Vec3(2.0, 4.0, 0.5))

    def test_roof_rests_on_house(self):
        house = make_object("h1", "house-basic", y=1.0)
        result = roof_placement("house-roof-flat", house)
        self.assertTrue(result.match_dimensions)
        self.assertEqual(result.scale, Vec3(1.0, 1.0, 1.0))
        self.assertAlmostEqual(result.position.y, 2.05)


if __name__ == "__main__":
    unittest.main()
