"""
Trajectory document codec.

Converts between the editing layer's JSON structure (keys startPoint, lines,
shapes, settings) and the frozen model types. No file access happens here;
loads()/dumps() work on strings.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, cast

from fieldpath.defaults import default_settings
from fieldpath.models import EventMarker, HeadingMode, Line, Settings, Shape, Vec2, Waypoint
from fieldpath.utils.errors import InvalidInputError

from .types import LineDict, PointDict, SettingsDict, ShapeDict, TrajectoryDocument

logger = logging.getLogger(__name__)

__all__ = [
    "Trajectory",
    "decode_point",
    "decode_waypoint",
    "encode_waypoint",
    "decode_line",
    "encode_line",
    "decode_shape",
    "encode_shape",
    "decode_settings",
    "encode_settings",
    "decode_document",
    "encode_document",
    "loads",
    "dumps",
]

# camelCase document key -> Settings attribute
_SETTINGS_KEYS = {
    "rWidth": "r_width",
    "rHeight": "r_height",
    "safetyMargin": "safety_margin",
    "optimizationQuality": "optimization_quality",
    "xVelocity": "x_velocity",
    "yVelocity": "y_velocity",
    "aVelocity": "a_velocity",
    "kFriction": "k_friction",
}


@dataclass(frozen=True)
class Trajectory:
    """A decoded document: start waypoint, segments, obstacles and settings."""

    start_point: Waypoint
    lines: tuple[Line, ...]
    shapes: tuple[Shape, ...] = ()
    settings: Settings = field(default_factory=default_settings)


def _require(data: Mapping[str, Any], key: str, what: str) -> Any:
    if not isinstance(data, Mapping) or key not in data:
        raise InvalidInputError(f"{what} is missing '{key}'")
    return data[key]


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"{what} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{what} must be a number, got {value!r}") from e


def decode_point(data: Mapping[str, Any]) -> Vec2:
    """Decode a control point / polygon vertex {x, y}."""
    return Vec2(_number(_require(data, "x", "point"), "x"), _number(_require(data, "y", "point"), "y"))


def decode_waypoint(data: PointDict | Mapping[str, Any]) -> Waypoint:
    """Decode a waypoint, dispatching on its 'heading' tag."""
    pos = decode_point(data)
    tag = _require(data, "heading", "waypoint")
    try:
        mode = HeadingMode(tag)
    except ValueError as e:
        raise InvalidInputError(f"Unknown heading mode {tag!r}") from e
    locked = bool(data.get("locked", False))

    if mode is HeadingMode.LINEAR:
        return Waypoint.linear(
            pos.x,
            pos.y,
            _number(_require(data, "startDeg", "linear waypoint"), "startDeg"),
            _number(_require(data, "endDeg", "linear waypoint"), "endDeg"),
            locked=locked,
        )
    if mode is HeadingMode.CONSTANT:
        return Waypoint.constant(
            pos.x, pos.y, _number(_require(data, "degrees", "constant waypoint"), "degrees"), locked=locked
        )
    return Waypoint.tangential(pos.x, pos.y, reverse=bool(data.get("reverse", False)), locked=locked)


def encode_waypoint(wp: Waypoint) -> PointDict:
    out: dict[str, Any] = {"x": wp.x, "y": wp.y, "heading": wp.mode.value}
    if wp.mode is HeadingMode.LINEAR:
        out["startDeg"] = wp.start_deg
        out["endDeg"] = wp.end_deg
    elif wp.mode is HeadingMode.CONSTANT:
        out["degrees"] = wp.degrees
    else:
        out["reverse"] = bool(wp.reverse)
    if wp.locked:
        out["locked"] = True
    return cast(PointDict, out)


def _decode_marker(data: Mapping[str, Any]) -> EventMarker:
    position = _number(_require(data, "position", "event marker"), "position")
    if not 0.0 <= position <= 1.0:
        raise InvalidInputError(f"Event marker position {position} outside [0, 1]")
    params = data.get("parameters")
    return EventMarker(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        position=position,
        line_index=None if data.get("lineIndex") is None else int(data["lineIndex"]),
        parameters=dict(params) if params is not None else None,
    )


def _encode_marker(marker: EventMarker) -> dict[str, Any]:
    out: dict[str, Any] = {"id": marker.id, "name": marker.name, "position": marker.position}
    if marker.line_index is not None:
        out["lineIndex"] = marker.line_index
    if marker.parameters is not None:
        out["parameters"] = dict(marker.parameters)
    return out


def decode_line(data: LineDict | Mapping[str, Any]) -> Line:
    end = decode_waypoint(_require(data, "endPoint", "line"))
    controls = tuple(decode_point(cp) for cp in data.get("controlPoints", None) or [])
    markers = tuple(_decode_marker(m) for m in data.get("eventMarkers", None) or [])
    name = data.get("name")
    return Line(
        end_point=end,
        control_points=controls,
        color=str(data.get("color", "#000000")),
        name=None if name is None else str(name),
        event_markers=markers,
        locked=bool(data.get("locked", False)),
    )


def encode_line(line: Line) -> LineDict:
    out: dict[str, Any] = {
        "endPoint": encode_waypoint(line.end_point),
        "controlPoints": [{"x": cp.x, "y": cp.y} for cp in line.control_points],
        "color": line.color,
        "eventMarkers": [_encode_marker(m) for m in line.event_markers],
        "locked": line.locked,
    }
    if line.name is not None:
        out["name"] = line.name
    return cast(LineDict, out)


def decode_shape(data: ShapeDict | Mapping[str, Any]) -> Shape:
    vertices = tuple(decode_point(v) for v in _require(data, "vertices", "shape"))
    name = data.get("name")
    return Shape(
        id=str(data.get("id", "")),
        vertices=vertices,
        name=None if name is None else str(name),
        color=str(data.get("color", "#dc2626")),
        fill_color=str(data.get("fillColor", "#fca5a5")),
    )


def encode_shape(shape: Shape) -> ShapeDict:
    out: dict[str, Any] = {
        "id": shape.id,
        "vertices": [{"x": v.x, "y": v.y} for v in shape.vertices],
        "color": shape.color,
        "fillColor": shape.fill_color,
    }
    if shape.name is not None:
        out["name"] = shape.name
    return cast(ShapeDict, out)


def decode_settings(data: SettingsDict | Mapping[str, Any] | None) -> Settings:
    """Merge document settings over the defaults; unknown keys are kept in extra."""
    base = default_settings()
    if not data:
        return base
    values: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        attr = _SETTINGS_KEYS.get(key)
        if attr is None:
            extra[key] = value
        elif attr == "optimization_quality":
            values[attr] = int(_number(value, key))
        else:
            values[attr] = _number(value, key)
    if extra:
        logger.debug(f"Carrying unrecognised settings keys: {sorted(extra)}")
    return Settings(**{**{k: getattr(base, k) for k in _SETTINGS_KEYS.values()}, **values}, extra=extra)


def encode_settings(settings: Settings) -> SettingsDict:
    out: dict[str, Any] = dict(settings.extra)
    for key, attr in _SETTINGS_KEYS.items():
        out[key] = getattr(settings, attr)
    return cast(SettingsDict, out)


def decode_document(data: TrajectoryDocument | Mapping[str, Any]) -> Trajectory:
    """Decode a full document; shapes and settings are optional."""
    if not isinstance(data, Mapping):
        raise InvalidInputError("Trajectory document must be a JSON object")
    start = decode_waypoint(_require(data, "startPoint", "document"))
    lines = _require(data, "lines", "document")
    if not isinstance(lines, list):
        raise InvalidInputError("'lines' must be a list")
    return Trajectory(
        start_point=start,
        lines=tuple(decode_line(line) for line in lines),
        shapes=tuple(decode_shape(s) for s in data.get("shapes", None) or []),
        settings=decode_settings(data.get("settings")),
    )


def encode_document(trajectory: Trajectory) -> TrajectoryDocument:
    return cast(
        TrajectoryDocument,
        {
            "startPoint": encode_waypoint(trajectory.start_point),
            "lines": [encode_line(line) for line in trajectory.lines],
            "shapes": [encode_shape(s) for s in trajectory.shapes],
            "settings": encode_settings(trajectory.settings),
        },
    )


def loads(text: str) -> Trajectory:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Trajectory document is not valid JSON: {e}") from e
    return decode_document(data)


def dumps(trajectory: Trajectory, indent: int | None = None) -> str:
    return json.dumps(encode_document(trajectory), indent=indent)
