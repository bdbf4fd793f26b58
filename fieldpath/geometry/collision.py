"""
Geometric collision detection between the robot footprint, the field and
polygonal obstacles.

Polygons are sequences of Vec2 interpreted as closed rings (last vertex joins
the first); winding order does not matter.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from enum import Enum

import numpy as np

from fieldpath.config import FIELD_SIZE, PARALLEL_THRESHOLD, TRACE
from fieldpath.models import Settings, Shape, Vec2

logger = logging.getLogger(__name__)

__all__ = [
    "CollisionKind",
    "point_in_polygon",
    "point_to_segment_distance",
    "min_distance_to_polygon",
    "polygon_center",
    "segments_intersect",
    "rect_corners",
    "point_in_rect",
    "rect_intersects_polygon",
    "corners_out_of_bounds",
    "check_robot_collision",
]


class CollisionKind(Enum):
    NONE = "none"
    BOUNDS = "bounds"
    OBSTACLE = "obstacle"


def point_in_polygon(point: Vec2, polygon: Sequence[Vec2]) -> bool:
    """
    Ray-casting parity test.

    Boundary points follow the half-open crossing rule: points on a left or
    bottom edge of an axis-aligned square count as inside, points on a right
    or top edge as outside. Other boundary cases are not guaranteed.
    """
    x, y = point.x, point.y
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def point_to_segment_distance(point: Vec2, start: Vec2, end: Vec2) -> float:
    """Euclidean distance from point to the closed segment start-end."""
    cx = end.x - start.x
    cy = end.y - start.y
    len_sq = cx * cx + cy * cy
    if len_sq == 0:
        return math.hypot(point.x - start.x, point.y - start.y)
    param = ((point.x - start.x) * cx + (point.y - start.y) * cy) / len_sq
    param = min(1.0, max(0.0, param))
    return math.hypot(point.x - (start.x + param * cx), point.y - (start.y + param * cy))


def min_distance_to_polygon(point: Vec2, polygon: Sequence[Vec2]) -> float:
    """Shortest distance from point to any polygon edge."""
    n = len(polygon)
    return min(point_to_segment_distance(point, polygon[i], polygon[(i + 1) % n]) for i in range(n))


def polygon_center(vertices: Sequence[Vec2]) -> Vec2:
    """Vertex centroid (mean of the vertices)."""
    arr = np.array([(v.x, v.y) for v in vertices], dtype=float)
    cx, cy = arr.mean(axis=0)
    return Vec2(float(cx), float(cy))


def segments_intersect(p1: Vec2, p2: Vec2, p3: Vec2, p4: Vec2) -> bool:
    """
    Whether segment p1-p2 crosses segment p3-p4.

    Parallel or coincident segments (|det| < PARALLEL_THRESHOLD) report no
    intersection.
    """
    # p1 + t * d1 == p3 + u * d2, solved by cross products with w = p3 - p1
    d1x, d1y = p2.x - p1.x, p2.y - p1.y
    d2x, d2y = p4.x - p3.x, p4.y - p3.y
    wx, wy = p3.x - p1.x, p3.y - p1.y
    det = d1x * d2y - d1y * d2x
    if abs(det) < PARALLEL_THRESHOLD:
        return False
    t = (wx * d2y - wy * d2x) / det
    u = (wx * d1y - wy * d1x) / det
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def _rotation(heading_rad: float) -> np.ndarray:
    c, s = math.cos(heading_rad), math.sin(heading_rad)
    return np.array([[c, -s], [s, c]])


# Half-extent sign pattern, walked around the rectangle
_CORNER_SIGNS = np.array([[-1.0, -1.0], [1.0, -1.0], [1.0, 1.0], [-1.0, 1.0]])


def rect_corners(center: Vec2, width: float, height: float, heading_rad: float) -> list[Vec2]:
    """
    Four corners of a width x height rectangle rotated by heading_rad about center.
    Width lies along the heading direction, height across it.
    """
    offsets = _CORNER_SIGNS * np.array([width / 2.0, height / 2.0])
    world = offsets @ _rotation(heading_rad).T + np.array([center.x, center.y])
    return [Vec2(float(x), float(y)) for x, y in world]


def point_in_rect(point: Vec2, center: Vec2, width: float, height: float, heading_rad: float) -> bool:
    """Inclusive containment test in the rectangle's local axes."""
    local = _rotation(-heading_rad) @ np.array([point.x - center.x, point.y - center.y])
    return bool(abs(local[0]) <= width / 2.0 and abs(local[1]) <= height / 2.0)


def rect_intersects_polygon(
    center: Vec2,
    width: float,
    height: float,
    heading_deg: float,
    polygon: Sequence[Vec2],
) -> bool:
    """
    Rotated rectangle vs polygon overlap.

    True when a rectangle corner lies in the polygon, a polygon vertex lies in
    the rectangle, or any pair of edges crosses. Together these cover
    containment either way and partial overlap.
    """
    heading_rad = math.radians(heading_deg)
    corners = rect_corners(center, width, height, heading_rad)

    if any(point_in_polygon(c, polygon) for c in corners):
        return True
    if any(point_in_rect(v, center, width, height, heading_rad) for v in polygon):
        return True

    n = len(polygon)
    for i in range(4):
        a, b = corners[i], corners[(i + 1) % 4]
        for j in range(n):
            if segments_intersect(a, b, polygon[j], polygon[(j + 1) % n]):
                return True
    return False


def corners_out_of_bounds(corners: Sequence[Vec2], field_size: float = FIELD_SIZE) -> bool:
    """True when any corner lies outside [0, field_size] on either axis."""
    return any(c.x < 0 or c.x > field_size or c.y < 0 or c.y > field_size for c in corners)


def check_robot_collision(
    position: Vec2,
    heading_deg: float,
    settings: Settings,
    shapes: Sequence[Shape],
) -> tuple[CollisionKind, Shape | None]:
    """
    Check the margin-inflated robot footprint against the field and obstacles.

    Returns:
        (kind, shape): kind is NONE, BOUNDS or OBSTACLE; shape is the first
        obstacle hit, otherwise None. Bounds are checked first.
    """
    width, height = settings.footprint
    corners = rect_corners(position, width, height, math.radians(heading_deg))
    if corners_out_of_bounds(corners):
        logger.trace(f"Footprint at ({position.x:.2f}, {position.y:.2f}) leaves the field")  # type: ignore[attr-defined]
        return CollisionKind.BOUNDS, None

    for shape in shapes:
        if rect_intersects_polygon(position, width, height, heading_deg, shape.vertices):
            if logger.isEnabledFor(TRACE):
                logger.trace(  # type: ignore[attr-defined]
                    f"Footprint at ({position.x:.2f}, {position.y:.2f}) overlaps '{shape.name or shape.id}'"
                )
            return CollisionKind.OBSTACLE, shape
    return CollisionKind.NONE, None
