"""Edge lattice — which unit edges of the sketch grid are drawn.

The canvas is ``cols × rows`` unit cells.  Every unit edge between two
lattice points carries two flags:

  BOUNDARY   any drawn segment (wall or opening); separates cells
  WALL       wall segments only; openings never set it

Horizontal edge (x, y) runs from lattice point (x, y) to (x+1, y);
vertical edge (x, y) runs from (x, y) to (x, y+1).  Both orientations
are stored in (rows+1) × (cols+1) byte arrays.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .models import GridSegment


# Edge flags
BOUNDARY = 1
WALL = 2


class EdgeLattice:
    """Drawn-edge flags for a ``cols × rows`` sketch canvas."""

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self._stride = cols + 1
        size = (rows + 1) * (cols + 1)
        self._horizontal = bytearray(size)
        self._vertical = bytearray(size)

    @classmethod
    def from_segments(
        cls, segments: Iterable[GridSegment], cols: int, rows: int,
    ) -> EdgeLattice:
        lattice = cls(cols, rows)
        for seg in segments:
            lattice.mark(seg)
        return lattice

    # ── Marking ────────────────────────────────────────────────────

    def mark(self, seg: GridSegment) -> None:
        """Flag every unit edge covered by *seg*.

        Parts of the segment outside the canvas are ignored.
        """
        flags = BOUNDARY if seg.is_opening else BOUNDARY | WALL
        if seg.is_horizontal:
            y = seg.start.y
            lo, hi = sorted((seg.start.x, seg.end.x))
            if not 0 <= y <= self.rows:
                return
            for x in range(max(lo, 0), min(hi, self.cols)):
                self._horizontal[y * self._stride + x] |= flags
        elif seg.is_vertical:
            x = seg.start.x
            lo, hi = sorted((seg.start.y, seg.end.y))
            if not 0 <= x <= self.cols:
                return
            for y in range(max(lo, 0), min(hi, self.rows)):
                self._vertical[y * self._stride + x] |= flags

    # ── Edge queries ───────────────────────────────────────────────

    def h_boundary(self, x: int, y: int) -> bool:
        return bool(self._horizontal[y * self._stride + x] & BOUNDARY)

    def v_boundary(self, x: int, y: int) -> bool:
        return bool(self._vertical[y * self._stride + x] & BOUNDARY)

    def h_wall(self, x: int, y: int) -> bool:
        return bool(self._horizontal[y * self._stride + x] & WALL)

    def v_wall(self, x: int, y: int) -> bool:
        return bool(self._vertical[y * self._stride + x] & WALL)

    # ── Cell queries ───────────────────────────────────────────────

    def in_bounds(self, cx: int, cy: int) -> bool:
        return 0 <= cx < self.cols and 0 <= cy < self.rows

    def neighbors(self, cx: int, cy: int) -> Iterator[tuple[int, int]]:
        """Cells 4-connected to (cx, cy) without crossing a boundary."""
        if cx > 0 and not self.v_boundary(cx, cy):
            yield (cx - 1, cy)
        if cx < self.cols - 1 and not self.v_boundary(cx + 1, cy):
            yield (cx + 1, cy)
        if cy > 0 and not self.h_boundary(cx, cy):
            yield (cx, cy - 1)
        if cy < self.rows - 1 and not self.h_boundary(cx, cy + 1):
            yield (cx, cy + 1)

    def exterior_seeds(self) -> Iterator[tuple[int, int]]:
        """Canvas-edge cells whose outer edge is not drawn."""
        for x in range(self.cols):
            if not self.h_boundary(x, 0):
                yield (x, 0)
            if not self.h_boundary(x, self.rows):
                yield (x, self.rows - 1)
        for y in range(self.rows):
            if not self.v_boundary(0, y):
                yield (0, y)
            if not self.v_boundary(self.cols, y):
                yield (self.cols - 1, y)
