"""
Pytest configuration and shared fixtures for the fieldpath test suite.

Provides small trajectories, obstacles and settings reused across the unit tests.
"""

import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from fieldpath.models import Line, Settings, Shape, Vec2, Waypoint


def square(x0: float, y0: float, x1: float, y1: float, shape_id: str = "box") -> Shape:
    """Axis-aligned obstacle from two opposite corners."""
    return Shape(
        id=shape_id,
        vertices=(Vec2(x0, y0), Vec2(x1, y0), Vec2(x1, y1), Vec2(x0, y1)),
    )


@pytest.fixture
def make_box():
    return square


@pytest.fixture
def point_robot() -> Settings:
    """Zero-footprint robot with no margin."""
    return Settings(r_width=0.0, r_height=0.0, safety_margin=0.0, optimization_quality=1)


@pytest.fixture
def small_robot() -> Settings:
    return Settings(r_width=10.0, r_height=10.0, safety_margin=1.0, optimization_quality=3)


@pytest.fixture
def straight_trajectory() -> tuple[Waypoint, list[Line]]:
    start = Waypoint.constant(10, 10, 0)
    lines = [Line(end_point=Waypoint.constant(130, 10, 0))]
    return start, lines


@pytest.fixture
def curved_trajectory() -> tuple[Waypoint, list[Line]]:
    """Two curved segments and a straight one, well inside the field."""
    start = Waypoint.linear(30, 30, 90, 180)
    lines = [
        Line(
            end_point=Waypoint.tangential(70, 40),
            control_points=(Vec2(40, 60),),
            color="#112233",
            name="Out",
        ),
        Line(
            end_point=Waypoint.constant(100, 80, 45),
            control_points=(Vec2(90, 30), Vec2(110, 50)),
            color="#445566",
        ),
        Line(end_point=Waypoint.linear(100, 110, 45, 90), color="#778899"),
    ]
    return start, lines
