"""
Heading interpolation for the three waypoint heading modes.

All angles are degrees in the field frame (0 = +x, counter-clockwise positive).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from fieldpath.config import TANGENT_OFFSET
from fieldpath.geometry.curve import evaluate_curve
from fieldpath.models import HeadingMode, Vec2, Waypoint


def normalize_angle_diff(diff: float) -> float:
    """Fold an angular difference into (-180, 180]."""
    while diff > 180.0:
        diff -= 360.0
    while diff <= -180.0:
        diff += 360.0
    return diff


def shortest_rotation(start_deg: float, end_deg: float, t: float) -> float:
    """Interpolate from start_deg toward end_deg along the shorter arc."""
    return start_deg + normalize_angle_diff(end_deg - start_deg) * t


def turn_sharpness(angle1: float, angle2: float) -> float:
    """Absolute shortest angular distance between two headings."""
    return abs(normalize_angle_diff(angle2 - angle1))


def direction_deg(a: Vec2, b: Vec2) -> float:
    """Direction of travel from a to b; 0.0 when the points coincide."""
    dx = b.x - a.x
    dy = b.y - a.y
    if dx == 0 and dy == 0:
        return 0.0
    return math.degrees(math.atan2(dy, dx))


def tangent_pair(points: Sequence[Vec2], t: float, offset: float = TANGENT_OFFSET) -> tuple[Vec2, Vec2]:
    """Curve positions just before and just after t, clamped to [0, 1]."""
    before = min(1.0, max(0.0, t - offset))
    after = min(1.0, max(0.0, t + offset))
    return evaluate_curve(before, points), evaluate_curve(after, points)


def heading_at(waypoint: Waypoint, t: float, tangent: tuple[Vec2, Vec2] | None = None) -> float:
    """
    Robot heading for a segment ending at `waypoint`, at progress t.

    Args:
        waypoint: End waypoint carrying the heading mode
        t: Progress fraction within the segment
        tangent: (before, after) curve samples around t; only used by the
            tangential mode. Missing or coincident samples yield 0.0.

    Returns:
        Heading in degrees. Ranges differ by mode:
          constant   -> the waypoint's angle as given, unnormalized
          linear     -> [0, 360)
          tangential -> (-180, 180], or (0, 360] when reversed
    """
    if waypoint.mode is HeadingMode.CONSTANT:
        return float(waypoint.degrees)
    if waypoint.mode is HeadingMode.LINEAR:
        # Wrapped into [0, 360) so a crossing of 0 deg reads as 0, not 360
        return shortest_rotation(float(waypoint.start_deg), float(waypoint.end_deg), t) % 360.0

    # Tangential
    if tangent is None:
        return 0.0
    before, after = tangent
    if before == after:
        return 0.0
    angle = direction_deg(before, after)
    if waypoint.reverse:
        angle += 180.0
    return angle
