"""Scene snapshot dataclasses — the read-only input of every query."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)


ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class GridInfo:
    """Drawing-grid metadata stored on a room when it is created.

    grid_size:      pixels per grid cell on the sketch canvas.
    world_scale:    world units per drawing pixel.
    drawing_bounds: (width, height) of the sketch canvas in pixels, or
                    None when the room predates stored bounds.
    """
    grid_size: float
    world_scale: float
    drawing_bounds: tuple[float, float] | None = None

    @property
    def cell_world_size(self) -> float:
        """World-space edge length of one grid cell."""
        return self.grid_size * self.world_scale


@dataclass(frozen=True)
class SceneObjectRef:
    """One scene object as seen by the geometry core.

    Rooms (type ``custom-room``) also carry their name, grid metadata and
    the drawing-space outline they were created from.
    """
    id: str
    type: str
    position: Vec3 = ZERO
    rotation: Vec3 = ZERO
    scale: Vec3 = ONE
    color: str = "#ffffff"
    room_name: str | None = None
    grid_info: GridInfo | None = None
    room_points: tuple[tuple[float, float], ...] | None = None


@dataclass(frozen=True)
class CommandRecord:
    """A translated scene command, as produced by the external translator.

    Only the fields the placement core reads are typed; everything else
    the translator sent is kept in *extra* and passed back untouched.
    """
    action: str
    object_id: str | None = None
    type: str | None = None
    color: str | None = None
    relative_to_object: str | None = None
    spatial_relation: str | None = None
    scale: Vec3 | None = None
    extra: dict | None = None
