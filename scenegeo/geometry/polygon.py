"""
Polygon helpers for room outlines.

Outlines are in drawing pixels: origin top-left, X right, Y down.
Shapely is only used where an interior point has to be guaranteed.
"""

from __future__ import annotations
from typing import Sequence

from shapely.geometry import Polygon

Vertex = tuple[float, float]  # (x, y)
Outline = Sequence[Vertex]


# ── Measures ────────────────────────────────────────────────────────


def polygon_area(outline: Outline) -> float:
    """Shoelace area.  Positive for clockwise outlines on a Y-down canvas."""
    if len(outline) < 3:
        return 0.0
    wrapped = list(outline[1:]) + [outline[0]]
    twice = sum(ax * by - bx * ay for (ax, ay), (bx, by) in zip(outline, wrapped))
    return twice / 2.0


def point_in_polygon(x: float, y: float, outline: Outline) -> bool:
    """Even-odd ray cast towards +X.  Fewer than 3 vertices contain nothing."""
    if len(outline) < 3:
        return False
    inside = False
    prev = outline[-1]
    for curr in outline:
        (x0, y0), (x1, y1) = prev, curr
        if (y0 > y) != (y1 > y):
            x_cross = x0 + (y - y0) * (x1 - x0) / (y1 - y0)
            if x < x_cross:
                inside = not inside
        prev = curr
    return inside


def polygon_bounds(outline: Outline) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y)."""
    xs = [v[0] for v in outline]
    ys = [v[1] for v in outline]
    return min(xs), min(ys), max(xs), max(ys)


def polygon_centroid(outline: Outline) -> Vertex:
    """Area centroid, pulled inside the polygon when it falls outside.

    Concave outlines (thin L- or U-shapes) can have their area centroid
    in a notch; shapely's representative point is used instead there, so
    the result always passes :func:`point_in_polygon`.
    """
    poly = Polygon(outline)
    c = poly.centroid
    if point_in_polygon(c.x, c.y, outline):
        return (c.x, c.y)
    rp = poly.representative_point()
    return (rp.x, rp.y)


# ── Simplification ──────────────────────────────────────────────────


def _cross(o: Vertex, a: Vertex, b: Vertex) -> float:
    """Cross product of (a - o) and (b - a)."""
    return (a[0] - o[0]) * (b[1] - a[1]) - (a[1] - o[1]) * (b[0] - a[0])


def remove_collinear(outline: Outline, epsilon: float = 0.01) -> list[Vertex]:
    """Drop every vertex whose incident edges are collinear.

    Repeated consecutive points (including a closing repeat of the
    first) are merged first.  A vertex survives when
    |cross(prev→curr, curr→next)| > *epsilon*.
    """
    points = [p for i, p in enumerate(outline) if i == 0 or p != outline[i - 1]]
    while len(points) > 1 and points[-1] == points[0]:
        points.pop()
    n = len(points)
    kept: list[Vertex] = []
    for i in range(n):
        prev = points[(i - 1) % n]
        curr = points[i]
        nxt = points[(i + 1) % n]
        if abs(_cross(prev, curr, nxt)) > epsilon:
            kept.append((curr[0], curr[1]))
    return kept
