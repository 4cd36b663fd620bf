"""Room serialization — sketch parsing and RoomPolygon <-> dict.

Sketch format (lattice coordinates)::

    [{"start": {"x": 1, "y": 1}, "end": {"x": 5, "y": 1}},
     {"start": {"x": 5, "y": 1}, "end": {"x": 5, "y": 3}, "isOpening": true},
     ...]

Room format (drawing pixels)::

    {"points": [{"x": 20, "y": 20}, ...], "name": "Room 1",
     "openings": [...], "allSegments": [...],
     "gridSize": 20, "drawingBounds": {"width": 400, "height": 400}}
"""

from __future__ import annotations

from .models import GridPoint, GridSegment, PixelSegment, RoomPolygon, SketchError


def _xy(p: dict) -> tuple[float, float]:
    return (p["x"], p["y"])


def _point_dict(p: tuple[float, float]) -> dict:
    return {"x": p[0], "y": p[1]}


# ── Sketches ───────────────────────────────────────────────────────


def parse_segment(data: dict) -> GridSegment:
    start, end = data["start"], data["end"]
    return GridSegment(
        start=GridPoint(int(start["x"]), int(start["y"])),
        end=GridPoint(int(end["x"]), int(end["y"])),
        is_opening=bool(data.get("isOpening", False)),
    )


def parse_sketch(data: list[dict]) -> list[GridSegment]:
    """Parse a list of segment dicts.

    Raises SketchError naming the offending segment's index.
    """
    segments = []
    for i, item in enumerate(data):
        try:
            segments.append(parse_segment(item))
        except SketchError as e:
            raise SketchError(e.reason, segment_index=i) from None
    return segments


# ── Rooms ──────────────────────────────────────────────────────────


def _pixel_segment_dict(seg: PixelSegment) -> dict:
    d = {"start": _point_dict(seg.start), "end": _point_dict(seg.end)}
    if seg.is_opening:
        d["isOpening"] = True
    return d


def _parse_pixel_segment(data: dict, opening: bool = False) -> PixelSegment:
    return PixelSegment(
        start=_xy(data["start"]),
        end=_xy(data["end"]),
        is_opening=bool(data.get("isOpening", opening)),
    )


def room_to_dict(room: RoomPolygon) -> dict:
    """Serialize a RoomPolygon to the editor's room-data shape."""
    d: dict = {"points": [_point_dict(p) for p in room.points]}
    if room.name is not None:
        d["name"] = room.name
    if room.openings:
        d["openings"] = [
            {"start": _point_dict(s.start), "end": _point_dict(s.end)}
            for s in room.openings
        ]
    if room.all_segments:
        d["allSegments"] = [_pixel_segment_dict(s) for s in room.all_segments]
    d["gridSize"] = room.grid_size
    d["drawingBounds"] = {
        "width": room.drawing_bounds[0],
        "height": room.drawing_bounds[1],
    }
    return d


def parse_room(data: dict) -> RoomPolygon:
    """Parse a room dict back into a RoomPolygon."""
    bounds = data.get("drawingBounds") or {"width": 400, "height": 400}
    return RoomPolygon(
        points=tuple(_xy(p) for p in data["points"]),
        grid_size=data.get("gridSize", 20),
        drawing_bounds=(bounds["width"], bounds["height"]),
        name=data.get("name"),
        openings=tuple(
            _parse_pixel_segment(s, opening=True) for s in data.get("openings", ())
        ),
        all_segments=tuple(
            _parse_pixel_segment(s) for s in data.get("allSegments", ())
        ),
    )
