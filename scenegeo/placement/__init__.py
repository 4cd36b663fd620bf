"""Placement — turns symbolic relations into collision-free coordinates.

Submodules:
  models        Dimensions, BoundingBox, SpatialRelation, result dataclasses.
  dimensions    Per-type dimension table, AABBs, overlap tests.
  resolver      Contact positions and dimension matching per relation.
  collision     Ring search for the nearest collision-free position.
  commands      Resolve relations inside translated command records.
  serialization JSON conversion (placement_to_dict, parse_placement).
"""

from .models import (
    Dimensions, BoundingBox, SpatialRelation, PlacementResult, CollisionResolution,
)
from .dimensions import (
    BASE_DIMENSIONS, dimensions, object_dimensions,
    bounding_box, bounding_box_at, aabb_overlap,
)
from .resolver import (
    hypothetical, should_match_dimensions, dimension_matching_scale,
    contact_position, resolve_placement, place_on_floor, center_in_room,
    find_roof_structure, roof_placement,
)
from .collision import (
    find_collisions, resolve_collision, resolve_collision_detailed,
    resolve_object_collision,
)
from .commands import enhance_commands
from .serialization import placement_to_dict, parse_placement

__all__ = [
    # Models
    "Dimensions", "BoundingBox", "SpatialRelation", "PlacementResult",
    "CollisionResolution",
    # Dimensions
    "BASE_DIMENSIONS", "dimensions", "object_dimensions",
    "bounding_box", "bounding_box_at", "aabb_overlap",
    # Resolver
    "hypothetical", "should_match_dimensions", "dimension_matching_scale",
    "contact_position", "resolve_placement", "place_on_floor",
    "center_in_room", "find_roof_structure", "roof_placement",
    # Collision
    "find_collisions", "resolve_collision", "resolve_collision_detailed",
    "resolve_object_collision",
    # Commands / Serialization
    "enhance_commands", "placement_to_dict", "parse_placement",
]
