import pytest
from fieldpath.geometry import heading
from fieldpath.models import Vec2, Waypoint


def test_linear_heading_takes_shortest_path_through_wraparound():
    wp = Waypoint.linear(0, 0, 350, 10)
    assert heading.heading_at(wp, 0.5) == pytest.approx(0.0)
    assert heading.heading_at(wp, 0.25) == pytest.approx(355.0)
    assert heading.heading_at(wp, 1.0) == pytest.approx(10.0)


@pytest.mark.parametrize(
    "start,end,t,expected",
    [
        (90, 180, 0.0, 90.0),
        (90, 180, 0.5, 135.0),
        (90, 180, 1.0, 180.0),
        (10, 350, 0.5, 0.0),
        (0, 270, 0.5, 315.0),
    ],
)
def test_linear_heading_interpolation(start, end, t, expected):
    assert heading.heading_at(Waypoint.linear(0, 0, start, end), t) == pytest.approx(expected)


def test_constant_heading_ignores_progress():
    wp = Waypoint.constant(5, 5, 42.5)
    assert heading.heading_at(wp, 0.0) == 42.5
    assert heading.heading_at(wp, 0.7) == 42.5


def test_tangential_heading_follows_direction_of_travel():
    wp = Waypoint.tangential(0, 0)
    assert heading.heading_at(wp, 0.5, (Vec2(0, 0), Vec2(0, 5))) == pytest.approx(90.0)
    assert heading.heading_at(wp, 0.5, (Vec2(0, 0), Vec2(-1, 0))) == pytest.approx(180.0)


def test_tangential_reverse_adds_half_turn():
    wp = Waypoint.tangential(0, 0, reverse=True)
    assert heading.heading_at(wp, 0.5, (Vec2(0, 0), Vec2(3, 0))) == pytest.approx(180.0)


def test_tangential_degenerate_samples_yield_zero():
    wp = Waypoint.tangential(0, 0, reverse=True)
    assert heading.heading_at(wp, 0.5, (Vec2(4, 4), Vec2(4, 4))) == 0.0
    assert heading.heading_at(wp, 0.5) == 0.0


def test_tangent_pair_clamps_to_curve():
    pts = [Vec2(0, 0), Vec2(100, 0)]
    before, after = heading.tangent_pair(pts, 0.0)
    assert before == pts[0]
    assert after.x == pytest.approx(1.0)

    before, after = heading.tangent_pair(pts, 1.0)
    assert after == pts[-1]
    assert before.x == pytest.approx(99.0)


@pytest.mark.parametrize(
    "diff,expected",
    [(0, 0), (190, -170), (-190, 170), (180, 180), (-180, 180), (540, 180), (725, 5)],
)
def test_normalize_angle_diff(diff, expected):
    assert heading.normalize_angle_diff(diff) == pytest.approx(expected)


def test_turn_sharpness_is_shortest_distance():
    assert heading.turn_sharpness(350, 10) == pytest.approx(20.0)
    assert heading.turn_sharpness(0, 270) == pytest.approx(90.0)


def test_heading_ranges_per_mode():
    assert heading.heading_at(Waypoint.linear(0, 0, -90, 0), 0.5) == pytest.approx(315.0)
    assert heading.heading_at(Waypoint.constant(0, 0, -30), 0.5) == -30.0
    down = (Vec2(0, 0), Vec2(0, -1))
    assert heading.heading_at(Waypoint.tangential(0, 0), 0.5, down) == pytest.approx(-90.0)
    assert heading.heading_at(Waypoint.tangential(0, 0, reverse=True), 0.5, down) == pytest.approx(90.0)
