"""Rooms — sketch-to-polygon extraction and room-relative queries.

Submodules:
  models        GridPoint, GridSegment, RoomPolygon, SketchError.
  lattice       EdgeLattice, drawn-edge flags of the sketch canvas.
  extractor     extract_rooms: enclosed regions → room polygons.
  query         Containment, drawing/world transforms, floor sampling.
  serialization Sketch parsing and RoomPolygon <-> dict.
"""

from .models import GridPoint, GridSegment, PixelSegment, RoomPolygon, SketchError
from .lattice import EdgeLattice
from .extractor import extract_rooms, segment
from .query import (
    point_in_polygon, world_to_drawing, drawing_to_world,
    room_center, floor_y, random_position_in_room,
    is_position_in_room, find_containing_room, snap_to_room_grid,
)
from .serialization import parse_segment, parse_sketch, room_to_dict, parse_room

__all__ = [
    # Models
    "GridPoint", "GridSegment", "PixelSegment", "RoomPolygon", "SketchError",
    # Extraction
    "EdgeLattice", "extract_rooms", "segment",
    # Queries
    "point_in_polygon", "world_to_drawing", "drawing_to_world",
    "room_center", "floor_y", "random_position_in_room",
    "is_position_in_room", "find_containing_room", "snap_to_room_grid",
    # Serialization
    "parse_segment", "parse_sketch", "room_to_dict", "parse_room",
]
