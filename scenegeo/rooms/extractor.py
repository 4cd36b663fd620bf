"""Room topology extraction — sketched grid segments to room polygons.

Pipeline:
  1. Mark every unit edge covered by a segment on an EdgeLattice.
  2. Flood-fill the exterior from every canvas-edge cell whose outer
     edge is open (component 0).
  3. Label the remaining enclosed components 1, 2, ... in scan order.
  4. Collect each component's boundary edges, oriented clockwise on
     screen (y grows downward).
  5. Chain the edges into a closed outline, scale to pixels and drop
     collinear vertices.
"""

from __future__ import annotations

import logging
from typing import Sequence

from scenegeo.config import SKETCH_RULES
from scenegeo.geometry.polygon import remove_collinear

from .lattice import EdgeLattice
from .models import GridPoint, GridSegment, PixelSegment, RoomPolygon


log = logging.getLogger(__name__)

EXTERIOR = 0
_UNLABELLED = -1

# Directed unit edge between two lattice points
Edge = tuple[tuple[int, int], tuple[int, int]]


# ── Labelling ──────────────────────────────────────────────────────


def _flood_fill(
    lattice: EdgeLattice,
    labels: list[int],
    seed: tuple[int, int],
    label: int,
) -> list[tuple[int, int]]:
    """Label every cell reachable from *seed*; return them seed first."""
    cols = lattice.cols
    sx, sy = seed
    if labels[sy * cols + sx] != _UNLABELLED:
        return []
    labels[sy * cols + sx] = label
    region = [seed]
    stack = [seed]
    while stack:
        cx, cy = stack.pop()
        for nx, ny in lattice.neighbors(cx, cy):
            idx = ny * cols + nx
            if labels[idx] == _UNLABELLED:
                labels[idx] = label
                region.append((nx, ny))
                stack.append((nx, ny))
    return region


def _label_components(
    lattice: EdgeLattice,
) -> tuple[list[int], list[list[tuple[int, int]]]]:
    """Label cells and return (labels, interior regions in label order)."""
    labels = [_UNLABELLED] * (lattice.cols * lattice.rows)
    for seed in lattice.exterior_seeds():
        _flood_fill(lattice, labels, seed, EXTERIOR)

    regions: list[list[tuple[int, int]]] = []
    for cy in range(lattice.rows):
        for cx in range(lattice.cols):
            if labels[cy * lattice.cols + cx] == _UNLABELLED:
                regions.append(
                    _flood_fill(lattice, labels, (cx, cy), len(regions) + 1)
                )
    return labels, regions


# ── Boundary tracing ───────────────────────────────────────────────


def _boundary_edges(
    lattice: EdgeLattice,
    labels: list[int],
    region: list[tuple[int, int]],
    label: int,
) -> list[Edge]:
    """Directed boundary edges of one component.

    An edge is on the boundary when the cell across it is outside the
    component, off the canvas, or separated by a drawn segment.
    """
    cols, rows = lattice.cols, lattice.rows

    def outside(nx: int, ny: int) -> bool:
        return not lattice.in_bounds(nx, ny) or labels[ny * cols + nx] != label

    edges: list[Edge] = []
    for cx, cy in region:
        if cy == 0 or outside(cx, cy - 1) or lattice.h_boundary(cx, cy):
            edges.append(((cx, cy), (cx + 1, cy)))
        if cx == cols - 1 or outside(cx + 1, cy) or lattice.v_boundary(cx + 1, cy):
            edges.append(((cx + 1, cy), (cx + 1, cy + 1)))
        if cy == rows - 1 or outside(cx, cy + 1) or lattice.h_boundary(cx, cy + 1):
            edges.append(((cx + 1, cy + 1), (cx, cy + 1)))
        if cx == 0 or outside(cx - 1, cy) or lattice.v_boundary(cx, cy):
            edges.append(((cx, cy + 1), (cx, cy)))
    return edges


def _turn_rank(incoming: Edge, outgoing: Edge) -> int:
    """Order junction exits: outer turn, straight, inner turn, reversal.

    Screen coordinates grow downward, so a negative cross product is a
    counter-clockwise (outer) turn for a clockwise outline.
    """
    (ax, ay), (bx, by) = incoming
    (cx, cy), (dx, dy) = outgoing
    ix, iy = bx - ax, by - ay
    ox, oy = dx - cx, dy - cy
    cross = ix * oy - iy * ox
    if cross < 0:
        return 0
    if cross > 0:
        return 2
    return 1 if ix * ox + iy * oy > 0 else 3


def _chain_edges(edges: list[Edge]) -> list[tuple[int, int]]:
    """Walk edges end-to-start into an ordered outline.

    Starts from the first edge and stops when the walk returns to its
    start, runs out of unused edges, or exceeds twice the edge count.
    At a junction the outer turn wins, so wall stubs poking into the
    room are stepped over.  A walk that never closes returns the
    partial outline.
    """
    if not edges:
        return []
    outgoing: dict[tuple[int, int], list[Edge]] = {}
    for edge in edges:
        outgoing.setdefault(edge[0], []).append(edge)

    start, current = edges[0][0], edges[0]
    used = {current}
    outline = [start]
    closed = False
    for _ in range(2 * len(edges)):
        point = current[1]
        if point == start:
            closed = True
            break
        outline.append(point)
        candidates = [e for e in outgoing.get(point, ()) if e not in used]
        if not candidates:
            break
        current = min(candidates, key=lambda e: _turn_rank(current, e))
        used.add(current)

    if not closed:
        log.warning("Boundary chain starting at %s did not close "
                    "(%d of %d edges used)", start, len(used), len(edges))
    return outline


# ── Conversion ─────────────────────────────────────────────────────


def _to_pixels(seg: GridSegment, grid_size: float) -> PixelSegment:
    return PixelSegment(
        start=(seg.start.x * grid_size, seg.start.y * grid_size),
        end=(seg.end.x * grid_size, seg.end.y * grid_size),
        is_opening=seg.is_opening,
    )


def extract_rooms(
    segments: Sequence[GridSegment],
    *,
    grid_size: float = SKETCH_RULES.default_grid_size,
    cols: int | None = None,
    rows: int | None = None,
    names: Sequence[str] | None = None,
) -> list[RoomPolygon]:
    """Find every enclosed room in a grid sketch.

    Parameters
    ----------
    segments : Sequence[GridSegment]
        Walls and openings in lattice coordinates.
    grid_size : float
        Pixels per grid cell.
    cols, rows : int | None
        Canvas size in cells.  Defaults to the sketch canvas
        (``SKETCH_RULES.canvas_width / grid_size`` and likewise for rows).
    names : Sequence[str] | None
        Optional room names, assigned by room index.  Rooms beyond the
        supplied names get ``"Room {n}"``.

    Returns
    -------
    list[RoomPolygon]
        One polygon per enclosed region, in scan order of their
        top-left cell.  Empty when fewer than three segments are given.
    """
    if len(segments) < SKETCH_RULES.min_segments:
        log.debug("Sketch has %d segments, nothing can be enclosed",
                  len(segments))
        return []

    if cols is None:
        cols = int(SKETCH_RULES.canvas_width // grid_size)
    if rows is None:
        rows = int(SKETCH_RULES.canvas_height // grid_size)

    lattice = EdgeLattice.from_segments(segments, cols, rows)
    labels, regions = _label_components(lattice)

    drawing_bounds = (cols * grid_size, rows * grid_size)
    all_pixels = tuple(_to_pixels(s, grid_size) for s in segments)
    openings = tuple(p for p in all_pixels if p.is_opening)

    rooms: list[RoomPolygon] = []
    for label, region in enumerate(regions, start=1):
        edges = _boundary_edges(lattice, labels, region, label)
        outline = _chain_edges(edges)
        if len(outline) < SKETCH_RULES.min_raw_points:
            log.debug("Component %d discarded: %d outline points",
                      label, len(outline))
            continue

        pixels = [(x * grid_size, y * grid_size) for x, y in outline]
        points = remove_collinear(pixels, SKETCH_RULES.collinear_epsilon)
        if len(points) < SKETCH_RULES.min_vertices:
            log.debug("Component %d discarded: degenerate after "
                      "simplification", label)
            continue

        index = len(rooms)
        if names is not None and index < len(names):
            name = names[index]
        else:
            name = f"Room {index + 1}"
        rooms.append(RoomPolygon(
            points=tuple(points),
            grid_size=grid_size,
            drawing_bounds=drawing_bounds,
            name=name,
            openings=openings,
            all_segments=all_pixels,
        ))

    log.info("Extracted %d room(s) from %d segments (%d enclosed regions)",
             len(rooms), len(segments), len(regions))
    return rooms


def segment(x0: int, y0: int, x1: int, y1: int, *, opening: bool = False) -> GridSegment:
    """Shorthand for a GridSegment between two lattice points."""
    return GridSegment(GridPoint(x0, y0), GridPoint(x1, y1), is_opening=opening)
