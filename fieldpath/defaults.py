"""
Default robot settings and starter trajectory for a fresh document.
"""

import math

from fieldpath.models import Line, Settings, Shape, Vec2, Waypoint

DEFAULT_ROBOT_WIDTH: float = 16.0
DEFAULT_ROBOT_HEIGHT: float = 16.0


def default_settings() -> Settings:
    return Settings(
        r_width=DEFAULT_ROBOT_WIDTH,
        r_height=DEFAULT_ROBOT_HEIGHT,
        safety_margin=1.0,
        optimization_quality=3,
        x_velocity=30.0,
        y_velocity=30.0,
        a_velocity=math.pi,
        k_friction=0.4,
    )


def default_start_point() -> Waypoint:
    return Waypoint.linear(56, 8, 90, 180)


def default_lines() -> list[Line]:
    return [
        Line(
            end_point=Waypoint.linear(56, 36, 90, 180),
            control_points=(),
            color="#5a9bd5",
            name="Path 1",
        )
    ]


def default_shapes() -> list[Shape]:
    """The two goal zones along the side walls."""
    return [
        Shape(
            id="triangle-1",
            name="Red Goal",
            vertices=(Vec2(144, 70), Vec2(144, 144), Vec2(118, 144), Vec2(138, 118), Vec2(138, 70)),
            color="#dc2626",
            fill_color="#fca5a5",
        ),
        Shape(
            id="triangle-2",
            name="Blue Goal",
            vertices=(Vec2(7, 118), Vec2(26, 144), Vec2(0, 144), Vec2(0, 70), Vec2(7, 70)),
            color="#0b08d9",
            fill_color="#fca5a5",
        ),
    ]
