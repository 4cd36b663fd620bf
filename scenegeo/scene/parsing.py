"""Scene snapshot parsing — convert raw dicts/JSON into scene dataclasses."""

from __future__ import annotations

from .models import Vec3, GridInfo, SceneObjectRef, CommandRecord, ZERO, ONE


# Command keys consumed into typed CommandRecord fields
_COMMAND_KEYS = {
    "action", "objectId", "type", "color", "relativeToObject",
    "spatialRelation", "scaleX", "scaleY", "scaleZ",
}


def parse_vec3(data, default: Vec3 = ZERO) -> Vec3:
    """Parse ``{"x":..,"y":..,"z":..}`` or a 3-item sequence.

    Missing components fall back to *default*'s.
    """
    if data is None:
        return default
    if isinstance(data, dict):
        return Vec3(
            float(data.get("x", default.x)),
            float(data.get("y", default.y)),
            float(data.get("z", default.z)),
        )
    x, y, z = data
    return Vec3(float(x), float(y), float(z))


def _parse_grid_info(data: dict | None) -> GridInfo | None:
    """Parse room grid metadata.

    Format:
        {"gridSize": 20, "worldScale": 0.05,
         "drawingBounds": {"width": 400, "height": 400}}
    """
    if not data:
        return None
    bounds = data.get("drawingBounds")
    return GridInfo(
        grid_size=float(data["gridSize"]),
        world_scale=float(data["worldScale"]),
        drawing_bounds=(
            (float(bounds["width"]), float(bounds["height"])) if bounds else None
        ),
    )


def parse_scene_object(data: dict) -> SceneObjectRef:
    """Parse one scene object dict (camelCase keys, as the editor sends them)."""
    points = data.get("roomPoints")
    if points is None and data.get("roomData"):
        points = data["roomData"].get("points")
    return SceneObjectRef(
        id=data["id"],
        type=data["type"],
        position=parse_vec3(data.get("position")),
        rotation=parse_vec3(data.get("rotation")),
        scale=parse_vec3(data.get("scale"), default=ONE),
        color=data.get("color", "#ffffff"),
        room_name=data.get("roomName"),
        grid_info=_parse_grid_info(data.get("gridInfo")),
        room_points=(
            tuple((float(p["x"]), float(p["y"])) for p in points)
            if points else None
        ),
    )


def parse_scene(data: list[dict]) -> list[SceneObjectRef]:
    return [parse_scene_object(d) for d in data]


def parse_command(data: dict) -> CommandRecord:
    """Parse a translated command dict into a CommandRecord.

    Scale is only set when at least one of scaleX/scaleY/scaleZ is given;
    missing axes default to 1.
    """
    scale = None
    if any(k in data for k in ("scaleX", "scaleY", "scaleZ")):
        scale = Vec3(
            float(data.get("scaleX", 1.0)),
            float(data.get("scaleY", 1.0)),
            float(data.get("scaleZ", 1.0)),
        )
    extra = {k: v for k, v in data.items() if k not in _COMMAND_KEYS}
    return CommandRecord(
        action=data["action"],
        object_id=data.get("objectId"),
        type=data.get("type"),
        color=data.get("color"),
        relative_to_object=data.get("relativeToObject"),
        spatial_relation=data.get("spatialRelation"),
        scale=scale,
        extra=extra or None,
    )


def command_to_dict(cmd: CommandRecord) -> dict:
    """Serialize a CommandRecord back to the translator's camelCase form."""
    out: dict = {"action": cmd.action}
    if cmd.object_id is not None:
        out["objectId"] = cmd.object_id
    if cmd.type is not None:
        out["type"] = cmd.type
    if cmd.color is not None:
        out["color"] = cmd.color
    if cmd.relative_to_object is not None:
        out["relativeToObject"] = cmd.relative_to_object
    if cmd.spatial_relation is not None:
        out["spatialRelation"] = cmd.spatial_relation
    if cmd.scale is not None:
        out["scaleX"] = cmd.scale.x
        out["scaleY"] = cmd.scale.y
        out["scaleZ"] = cmd.scale.z
    if cmd.extra:
        out.update(cmd.extra)
    return out
