"""Polygon primitives — area, containment, bounds, centroid, simplification."""

from .polygon import (
    point_in_polygon,
    polygon_area,
    polygon_bounds,
    polygon_centroid,
    remove_collinear,
)

__all__ = [
    "point_in_polygon", "polygon_area", "polygon_bounds",
    "polygon_centroid", "remove_collinear",
]
