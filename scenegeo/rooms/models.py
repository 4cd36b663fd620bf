"""Sketch and room dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


class SketchError(ValueError):
    """Raised when a sketch contains a structurally invalid segment."""

    def __init__(self, reason: str, segment_index: int | None = None) -> None:
        self.reason = reason
        self.segment_index = segment_index
        where = f"segment {segment_index}: " if segment_index is not None else ""
        super().__init__(f"Invalid sketch {where}{reason}")


# ── Sketch input ───────────────────────────────────────────────────


@dataclass(frozen=True)
class GridPoint:
    """An integer lattice point on the sketch canvas."""
    x: int
    y: int


@dataclass(frozen=True)
class GridSegment:
    """A drawn line between two lattice points.

    Walls and openings (doorways) are both segments; openings still
    separate rooms but are not built as walls.  Segments must be purely
    horizontal or purely vertical.
    """
    start: GridPoint
    end: GridPoint
    is_opening: bool = False

    def __post_init__(self) -> None:
        if self.start.x != self.end.x and self.start.y != self.end.y:
            raise SketchError(
                f"({self.start.x}, {self.start.y})→({self.end.x}, {self.end.y}) "
                f"is neither horizontal nor vertical"
            )

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y and self.start.x != self.end.x

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x and self.start.y != self.end.y


# ── Room output ────────────────────────────────────────────────────


@dataclass(frozen=True)
class PixelSegment:
    """A sketch segment converted to drawing-space pixels."""
    start: tuple[float, float]
    end: tuple[float, float]
    is_opening: bool = False


@dataclass(frozen=True)
class RoomPolygon:
    """A closed room outline traced from a sketch.

    points:         ordered outline vertices in drawing pixels, no
                    collinear vertices.
    openings:       every opening segment of the sketch (pixels).
    all_segments:   every segment of the sketch (pixels), for interior
                    walls.
    grid_size:      pixels per grid cell.
    drawing_bounds: (width, height) of the canvas in pixels.
    """
    points: tuple[tuple[float, float], ...]
    grid_size: float
    drawing_bounds: tuple[float, float]
    name: str | None = None
    openings: tuple[PixelSegment, ...] = ()
    all_segments: tuple[PixelSegment, ...] = ()

    @property
    def wall_segments(self) -> tuple[PixelSegment, ...]:
        """Segments that are built as walls (openings excluded)."""
        return tuple(s for s in self.all_segments if not s.is_opening)
