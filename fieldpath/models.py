"""
Value types shared by the geometry, planning and document layers.

All types are frozen; the engine produces new instances instead of mutating
caller-owned data.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fieldpath.utils.errors import InvalidInputError


class HeadingMode(Enum):
    """How the robot's facing angle varies across a segment."""

    LINEAR = "linear"
    CONSTANT = "constant"
    TANGENTIAL = "tangential"


@dataclass(frozen=True)
class Vec2:
    """Field position in inches. Control points are plain Vec2 values."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ControlPoint = Vec2


@dataclass(frozen=True)
class Waypoint:
    """
    Segment endpoint with a heading specification.

    Exactly one mode's payload is populated:
      LINEAR     -> start_deg, end_deg
      CONSTANT   -> degrees
      TANGENTIAL -> reverse
    Use the linear()/constant()/tangential() constructors.
    """

    x: float
    y: float
    mode: HeadingMode
    start_deg: float | None = None
    end_deg: float | None = None
    degrees: float | None = None
    reverse: bool | None = None
    locked: bool = False

    def __post_init__(self):
        populated = {
            "start_deg": self.start_deg is not None,
            "end_deg": self.end_deg is not None,
            "degrees": self.degrees is not None,
            "reverse": self.reverse is not None,
        }
        expected = {
            HeadingMode.LINEAR: {"start_deg", "end_deg"},
            HeadingMode.CONSTANT: {"degrees"},
            HeadingMode.TANGENTIAL: {"reverse"},
        }[self.mode]
        actual = {name for name, present in populated.items() if present}
        if actual != expected:
            raise InvalidInputError(
                f"{self.mode.value} waypoint requires fields {sorted(expected)}, got {sorted(actual)}"
            )

    @classmethod
    def linear(cls, x: float, y: float, start_deg: float, end_deg: float, locked: bool = False) -> Waypoint:
        return cls(x, y, HeadingMode.LINEAR, start_deg=float(start_deg), end_deg=float(end_deg), locked=locked)

    @classmethod
    def constant(cls, x: float, y: float, degrees: float, locked: bool = False) -> Waypoint:
        return cls(x, y, HeadingMode.CONSTANT, degrees=float(degrees), locked=locked)

    @classmethod
    def tangential(cls, x: float, y: float, reverse: bool = False, locked: bool = False) -> Waypoint:
        return cls(x, y, HeadingMode.TANGENTIAL, reverse=bool(reverse), locked=locked)

    @property
    def position(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class EventMarker:
    """Named marker along a segment; carried through the engine untouched."""

    id: str
    name: str
    position: float
    line_index: int | None = None
    parameters: dict[str, Any] | None = None


@dataclass(frozen=True)
class Line:
    """One path segment: interior control points and an end waypoint."""

    end_point: Waypoint
    control_points: tuple[Vec2, ...] = ()
    color: str = "#000000"
    name: str | None = None
    event_markers: tuple[EventMarker, ...] = ()
    locked: bool = False

    def with_control_points(self, points: Sequence[Vec2]) -> Line:
        return dataclasses.replace(self, control_points=tuple(points))


@dataclass(frozen=True)
class Shape:
    """Obstacle polygon; vertices form a closed ring in any winding order."""

    id: str
    vertices: tuple[Vec2, ...]
    name: str | None = None
    color: str = "#dc2626"
    fill_color: str = "#fca5a5"

    def __post_init__(self):
        if len(self.vertices) < 3:
            raise InvalidInputError(f"Shape '{self.id}' needs at least 3 vertices, got {len(self.vertices)}")


@dataclass(frozen=True)
class Settings:
    """
    Robot footprint, safety and optimization settings.

    r_width/r_height are the full footprint extents (inches). The collision
    footprint grows by safety_margin on every side. Velocity/friction fields
    belong to the editing layer and pass through unchanged.
    """

    r_width: float = 16.0
    r_height: float = 16.0
    safety_margin: float = 1.0
    optimization_quality: int = 3
    x_velocity: float = 30.0
    y_velocity: float = 30.0
    a_velocity: float = math.pi
    k_friction: float = 0.4
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def footprint(self) -> tuple[float, float]:
        """Inflated (width, height) used for collision checks."""
        return (
            self.r_width + self.safety_margin * 2,
            self.r_height + self.safety_margin * 2,
        )


@dataclass(frozen=True)
class RobotState:
    """Robot pose at a playback instant (inches, degrees)."""

    x: float
    y: float
    heading: float


def segment_start(start_point: Waypoint, lines: Sequence[Line], index: int) -> Waypoint:
    """Implicit start of segment `index`: previous end, or the trajectory start."""
    return start_point if index == 0 else lines[index - 1].end_point


def segment_points(start_point: Waypoint, lines: Sequence[Line], index: int) -> list[Vec2]:
    """Ordered curve points [start, *controls, end] for segment `index`."""
    line = lines[index]
    start = segment_start(start_point, lines, index)
    return [start.position, *line.control_points, line.end_point.position]
