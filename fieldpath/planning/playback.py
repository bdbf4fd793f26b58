"""
Playback state sampling.

Maps a global progress percentage onto a segment, an eased local parameter and
a robot pose, and provides a frame-step driver for an externally owned timer
(display refresh callback, GUI timer, test loop).
"""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fieldpath.config import PERCENT_EPSILON, PLAYBACK_RATE
from fieldpath.geometry.curve import ease_in_out_quad, evaluate_curve
from fieldpath.geometry.heading import heading_at, tangent_pair
from fieldpath.models import HeadingMode, Line, RobotState, Waypoint, segment_points
from fieldpath.utils.errors import InvalidInputError

logger = logging.getLogger(__name__)


def locate(percent: float, segment_count: int) -> tuple[int, float]:
    """
    Split a global percent into (segment index, eased local t).

    Percent is clamped to [0, 100 - PERCENT_EPSILON] so 100 maps onto the end
    of the last segment rather than past it. NaN reads as 0.
    """
    p = float(percent)
    if math.isnan(p):
        p = 0.0
    p = min(max(p, 0.0), 100.0 - PERCENT_EPSILON)
    total = segment_count * p / 100.0
    whole = math.floor(total)
    index = min(max(int(whole), 0), segment_count - 1)
    return index, ease_in_out_quad(total - whole)


def sample_robot_state(percent: float, lines: Sequence[Line], start_point: Waypoint) -> RobotState:
    """
    Robot pose (field inches, degrees) at a global playback percentage.

    Raises:
        InvalidInputError: lines is empty
    """
    if not lines:
        raise InvalidInputError("Invalid path: No waypoints defined")

    index, local_t = locate(percent, len(lines))
    points = segment_points(start_point, lines, index)
    position = evaluate_curve(local_t, points)

    end = lines[index].end_point
    tangent = tangent_pair(points, local_t) if end.mode is HeadingMode.TANGENTIAL else None
    return RobotState(position.x, position.y, heading_at(end, local_t, tangent))


@dataclass(frozen=True)
class PlaybackState:
    playing: bool = False
    percent: float = 0.0
    previous_time: float | None = None


def advance(state: PlaybackState, elapsed_ms: float, line_count: int) -> PlaybackState:
    """
    One frame step.

    Progress grows by (PLAYBACK_RATE / line_count) percent per 10 ms so every
    segment plays for the same wall time. A frame that finds percent at or past
    100 wraps it to 0 instead of advancing; playback loops indefinitely.
    Paused states are returned unchanged.
    """
    if not state.playing:
        return state
    if state.percent >= 100.0:
        return dataclasses.replace(state, percent=0.0)
    step = (PLAYBACK_RATE / max(1, line_count)) * (elapsed_ms * 0.1)
    return dataclasses.replace(state, percent=state.percent + step)


class PlaybackController:
    """
    Drives PlaybackState from frame timestamps supplied by the caller.

    The owner calls tick() from its frame callback and keeps requesting frames
    while tick() returns True. pause() keeps the current percent.
    """

    def __init__(self, line_count: int, on_percent_change: Callable[[float], None] | None = None):
        self.line_count = line_count
        self.on_percent_change = on_percent_change
        self.state = PlaybackState()

    @property
    def percent(self) -> float:
        return self.state.percent

    @property
    def is_playing(self) -> bool:
        return self.state.playing

    def play(self) -> None:
        if not self.state.playing:
            self.state = dataclasses.replace(self.state, playing=True, previous_time=None)
            logger.debug(f"Playback started at {self.state.percent:.2f}%")

    def pause(self) -> None:
        if self.state.playing:
            self.state = dataclasses.replace(self.state, playing=False)
            logger.debug(f"Playback paused at {self.state.percent:.2f}%")

    def set_percent(self, percent: float) -> None:
        self.state = dataclasses.replace(self.state, percent=float(percent))
        self._notify()

    def update_line_count(self, count: int) -> None:
        self.line_count = count

    def tick(self, timestamp_ms: float) -> bool:
        """
        Advance from a frame timestamp (ms). The first tick after play() only
        records the timestamp.

        Returns:
            True while playing, i.e. the caller should schedule another frame
        """
        if not self.state.playing:
            return False
        if self.state.previous_time is not None:
            elapsed = timestamp_ms - self.state.previous_time
            self.state = advance(self.state, elapsed, self.line_count)
            self._notify()
        self.state = dataclasses.replace(self.state, previous_time=timestamp_ms)
        return self.state.playing

    def _notify(self) -> None:
        if self.on_percent_change is not None:
            self.on_percent_change(self.state.percent)
