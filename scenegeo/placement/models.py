"""Placement dataclasses and the spatial-relation enum."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scenegeo.scene.models import Vec3


# ── Geometry values ────────────────────────────────────────────────


@dataclass(frozen=True)
class Dimensions:
    """World-space extent of an object (X = width, Y = height, Z = depth)."""

    width: float
    height: float
    depth: float

    def scaled(self, scale: Vec3) -> Dimensions:
        return Dimensions(
            self.width * scale.x,
            self.height * scale.y,
            self.depth * scale.z,
        )


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box.  Rotation is never applied."""

    min: Vec3
    max: Vec3

    @property
    def size(self) -> Vec3:
        return self.max - self.min

    @property
    def center(self) -> Vec3:
        return Vec3(
            (self.min.x + self.max.x) / 2,
            (self.min.y + self.max.y) / 2,
            (self.min.z + self.max.z) / 2,
        )


# ── Relations ──────────────────────────────────────────────────────


class SpatialRelation(str, Enum):
    ON_TOP_OF = "on-top-of"
    BESIDE = "beside"
    IN_FRONT_OF = "in-front-of"
    BEHIND = "behind"
    ABOVE = "above"
    BELOW = "below"
    INSIDE = "inside"

    @classmethod
    def parse(cls, value: str | SpatialRelation | None) -> SpatialRelation | None:
        """Parse a translator relation string; None when unrecognized."""
        if value is None or isinstance(value, SpatialRelation):
            return value
        key = value.strip().lower().replace(" ", "-").replace("_", "-")
        if key == "next-to":
            return cls.BESIDE
        try:
            return cls(key)
        except ValueError:
            return None


# ── Results ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PlacementResult:
    """Where (and how large) a target should be to realise a relation."""

    position: Vec3
    scale: Vec3 | None = None
    match_dimensions: bool = False
    contact_type: str = "direct"


@dataclass(frozen=True)
class CollisionResolution:
    """Outcome of a collision search around a candidate position.

    strategy is one of ``"clear"`` (no overlap), ``"expected-contact"``
    (only the intended reference touches), ``"spiral"`` or ``"flush"``.
    """

    position: Vec3
    strategy: str
    collided_ids: tuple[str, ...] = ()
    positions_tested: int = 0

    @property
    def moved(self) -> bool:
        return self.strategy in ("spiral", "flush")
