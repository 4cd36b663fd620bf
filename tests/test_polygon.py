"""Tests for the polygon primitives, checked against shapely where useful."""

from __future__ import annotations

import unittest

from shapely.geometry import Point, Polygon

from scenegeo.geometry import (
    point_in_polygon,
    polygon_area,
    polygon_bounds,
    polygon_centroid,
    remove_collinear,
)


SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

# Thin U-shape: area centroid falls in the notch
U_SHAPE = [
    (0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (90.0, 100.0),
    (90.0, 10.0), (10.0, 10.0), (10.0, 100.0), (0.0, 100.0),
]


class TestPolygonPrimitives(unittest.TestCase):

    def test_area(self):
        self.assertAlmostEqual(abs(polygon_area(SQUARE)), 100.0)
        self.assertAlmostEqual(abs(polygon_area(U_SHAPE)), Polygon(U_SHAPE).area)
        self.assertEqual(polygon_area(SQUARE[:2]), 0.0)

    def test_point_in_polygon_agrees_with_shapely(self):
        poly = Polygon(U_SHAPE)
        for x in range(5, 100, 10):
            for y in range(5, 100, 10):
                self.assertEqual(
                    point_in_polygon(x, y, U_SHAPE),
                    poly.contains(Point(x, y)),
                    f"({x}, {y})",
                )

    def test_degenerate_polygon_contains_nothing(self):
        self.assertFalse(point_in_polygon(0.0, 0.0, []))
        self.assertFalse(point_in_polygon(1.0, 0.0, [(0.0, 0.0), (2.0, 0.0)]))

    def test_bounds(self):
        self.assertEqual(polygon_bounds(U_SHAPE), (0.0, 0.0, 100.0, 100.0))

    def test_centroid_of_convex_polygon(self):
        self.assertEqual(polygon_centroid(SQUARE), (5.0, 5.0))

    def test_centroid_of_concave_polygon_is_interior(self):
        cx, cy = polygon_centroid(U_SHAPE)
        self.assertTrue(point_in_polygon(cx, cy, U_SHAPE))


class TestRemoveCollinear(unittest.TestCase):

    def test_drops_midpoints(self):
        outline = [(0, 0), (20, 0), (40, 0), (40, 20), (40, 40), (0, 40), (0, 20)]
        self.assertEqual(
            remove_collinear(outline),
            [(0, 0), (40, 0), (40, 40), (0, 40)],
        )

    def test_keeps_corners(self):
        self.assertEqual(remove_collinear(SQUARE), SQUARE)

    def test_merges_repeated_points(self):
        outline = [(0, 0), (20, 0), (20, 0), (40, 0), (40, 40), (0, 40), (0, 0)]
        self.assertEqual(
            remove_collinear(outline),
            [(0, 0), (40, 0), (40, 40), (0, 40)],
        )

    def test_epsilon_threshold(self):
        nearly = [(0.0, 0.0), (1.0, 0.001), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]
        self.assertEqual(len(remove_collinear(nearly, epsilon=0.01)), 4)
        self.assertEqual(len(remove_collinear(nearly, epsilon=0.0001)), 5)


if __name__ == "__main__":
    unittest.main()
