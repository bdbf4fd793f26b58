from .collision import (
    CollisionKind,
    check_robot_collision,
    point_in_polygon,
    point_to_segment_distance,
    rect_corners,
    rect_intersects_polygon,
    segments_intersect,
)
from .curve import ease_in_out_quad, evaluate_curve, sample_curve
from .heading import heading_at, normalize_angle_diff, shortest_rotation, tangent_pair

__all__ = [
    "CollisionKind",
    "check_robot_collision",
    "point_in_polygon",
    "point_to_segment_distance",
    "rect_corners",
    "rect_intersects_polygon",
    "segments_intersect",
    "ease_in_out_quad",
    "evaluate_curve",
    "sample_curve",
    "heading_at",
    "normalize_angle_diff",
    "shortest_rotation",
    "tangent_pair",
]
