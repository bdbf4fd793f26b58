"""
Type definitions for the trajectory document exchanged with the editing layer.

Keys use the editor's camelCase names.
"""

from typing import Any, Literal, TypedDict

HeadingName = Literal["linear", "constant", "tangential"]


class PointDict(TypedDict, total=False):
    """Waypoint or control point; heading fields only on waypoints."""
    x: float
    y: float
    locked: bool
    heading: HeadingName
    startDeg: float
    endDeg: float
    degrees: float
    reverse: bool


class EventMarkerDict(TypedDict, total=False):
    id: str
    name: str
    position: float
    lineIndex: int
    parameters: dict[str, Any]


class LineDict(TypedDict, total=False):
    endPoint: PointDict
    controlPoints: list[PointDict]
    color: str
    name: str
    eventMarkers: list[EventMarkerDict]
    locked: bool


class ShapeDict(TypedDict, total=False):
    id: str
    name: str
    vertices: list[PointDict]
    color: str
    fillColor: str


class SettingsDict(TypedDict, total=False):
    xVelocity: float
    yVelocity: float
    aVelocity: float
    kFriction: float
    rWidth: float
    rHeight: float
    safetyMargin: float
    optimizationQuality: int


class TrajectoryDocument(TypedDict, total=False):
    startPoint: PointDict
    lines: list[LineDict]
    shapes: list[ShapeDict]
    settings: SettingsDict


class OptimizationResultDict(TypedDict, total=False):
    success: bool
    optimizedLines: list[LineDict]
    error: str
