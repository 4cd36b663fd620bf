"""Placement serialization — JSON conversion."""

from __future__ import annotations

from scenegeo.scene.models import Vec3
from scenegeo.scene.parsing import parse_vec3

from .models import PlacementResult


def vec3_to_xyz(v: Vec3) -> dict:
    return {"x": v.x, "y": v.y, "z": v.z}


def placement_to_dict(result: PlacementResult) -> dict:
    """Serialize a PlacementResult to the scene layer's JSON shape."""
    return {
        "position": vec3_to_xyz(result.position),
        **({"scale": vec3_to_xyz(result.scale)} if result.scale is not None else {}),
        "matchDimensions": result.match_dimensions,
        "contactType": result.contact_type,
    }


def parse_placement(data: dict) -> PlacementResult:
    """Parse a placement dict back into a PlacementResult."""
    scale = data.get("scale")
    return PlacementResult(
        position=parse_vec3(data["position"]),
        scale=parse_vec3(scale) if scale is not None else None,
        match_dimensions=bool(data.get("matchDimensions", False)),
        contact_type=data.get("contactType", "direct"),
    )
