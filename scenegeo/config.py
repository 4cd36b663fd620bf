"""Shared constants for the placement engine and the sketch extractor.

The **resolver** (contact positions), the **collision** search and the
**room** queries all read their tuning values from the singletons below,
so a change here keeps every stage in sync.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlacementRules:
    """Tuning values for contact placement and collision search.

    All distances are in world units.
    """

    above_gap: float = 0.2
    """Vertical gap left between reference top and target bottom for
    the *above* relation (on-top-of is flush)."""

    search_step: float = 0.1
    """Radius increment of the spiral collision search."""

    search_max_radius: float = 5.0
    """Outermost ring tested before falling back to flush placement."""

    search_angles: int = 16
    """Sample directions per ring."""

    ground_types: tuple[str, ...] = ("ground", "floor", "foundation")
    """Object types that never count as obstacles."""

    room_type: str = "custom-room"
    """Type tag of rooms created from a sketch."""

    room_base_height: float = 2.5
    """Unscaled height of a custom room (matches the dimension table)."""

    room_sample_attempts: int = 50
    """Rejection-sampling budget for a random point inside a room."""

    default_drawing_bounds: tuple[float, float] = (400.0, 400.0)
    """Canvas size assumed for rooms stored without drawing bounds."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def search_rings(self) -> int:
        """Number of rings between search_step and search_max_radius."""
        return int(round(self.search_max_radius / self.search_step))


@dataclass(frozen=True)
class SketchRules:
    """Thresholds for turning grid sketches into room polygons.

    Lattice coordinates are integer grid points; drawing coordinates are
    pixels (lattice × grid size).
    """

    min_segments: int = 3
    """Sketches with fewer segments cannot enclose a room."""

    min_raw_points: int = 4
    """Traced boundaries shorter than this are discarded."""

    min_vertices: int = 3
    """Simplified polygons need at least a triangle."""

    collinear_epsilon: float = 0.01
    """Cross products at or below this mark a collinear vertex."""

    default_grid_size: int = 20
    """Pixels per grid cell on the drawing canvas."""

    canvas_width: int = 400
    canvas_height: int = 400


# Module-level singletons, importable everywhere.
PLACEMENT_RULES = PlacementRules()
SKETCH_RULES = SketchRules()
