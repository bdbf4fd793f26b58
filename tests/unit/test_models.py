import pytest
from fieldpath.defaults import default_settings, default_start_point
from fieldpath.models import HeadingMode, Line, Settings, Shape, Vec2, Waypoint, segment_points, segment_start
from fieldpath.utils.errors import FieldPathError, InvalidInputError


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mode": HeadingMode.LINEAR, "degrees": 5.0},
        {"mode": HeadingMode.LINEAR, "start_deg": 0.0},
        {"mode": HeadingMode.CONSTANT},
        {"mode": HeadingMode.CONSTANT, "degrees": 5.0, "reverse": False},
        {"mode": HeadingMode.TANGENTIAL, "start_deg": 0.0, "end_deg": 90.0},
    ],
)
def test_waypoint_rejects_mismatched_heading_fields(kwargs):
    with pytest.raises(InvalidInputError) as exc:
        Waypoint(0, 0, **kwargs)
    assert isinstance(exc.value, FieldPathError)


def test_waypoint_constructors_fill_their_variant():
    wp = Waypoint.linear(1, 2, 90, 180)
    assert (wp.start_deg, wp.end_deg, wp.degrees, wp.reverse) == (90.0, 180.0, None, None)
    assert Waypoint.constant(1, 2, 45).degrees == 45.0
    assert Waypoint.tangential(1, 2).reverse is False
    assert wp.position == Vec2(1, 2)


def test_shape_needs_three_vertices():
    with pytest.raises(InvalidInputError):
        Shape(id="bad", vertices=(Vec2(0, 0), Vec2(1, 1)))


def test_settings_footprint_includes_margin_on_both_sides():
    s = Settings(r_width=14, r_height=18, safety_margin=2)
    assert s.footprint == (18, 22)
    assert default_settings() == Settings()


def test_segment_start_chains_previous_end():
    start = default_start_point()
    lines = [
        Line(end_point=Waypoint.constant(20, 20, 0)),
        Line(end_point=Waypoint.constant(40, 20, 0), control_points=(Vec2(30, 40),)),
    ]
    assert segment_start(start, lines, 0) is start
    assert segment_start(start, lines, 1) is lines[0].end_point
    assert segment_points(start, lines, 1) == [Vec2(20, 20), Vec2(30, 40), Vec2(40, 20)]


def test_with_control_points_returns_copy():
    line = Line(end_point=Waypoint.constant(20, 20, 0), name="Path 1")
    moved = line.with_control_points([Vec2(5, 5)])
    assert moved.control_points == (Vec2(5, 5),)
    assert moved.name == "Path 1"
    assert line.control_points == ()
