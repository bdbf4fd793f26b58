"""
Collision-aware path optimizer and validator.

Samples every segment of a trajectory, checks the robot footprint against the
field bounds and obstacles at each sample, and on success pulls control points
toward their segment midpoint. The input trajectory is never modified.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, cast

from fieldpath.config import (
    INTERPOLATE_STRAIGHT_SEGMENTS,
    MIN_SAMPLES_PER_SEGMENT,
    QUALITY_MAX,
    QUALITY_MIN,
    SAMPLES_QUALITY_MULTIPLIER,
    SMOOTHING_MULTIPLIER,
    SMOOTHING_SCALE,
)
from fieldpath.geometry.collision import CollisionKind, check_robot_collision
from fieldpath.geometry.curve import sample_curve
from fieldpath.geometry.heading import direction_deg, heading_at
from fieldpath.models import Line, Settings, Shape, Vec2, Waypoint
from fieldpath.protocol.document import encode_line
from fieldpath.protocol.types import OptimizationResultDict
from fieldpath.utils.errors import BoundsViolationError, CollisionError, InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    """
    Outcome of optimize()/validate().

    On success optimized_lines holds the smoothed trajectory (None for
    validation). On failure error holds the message and, for collisions,
    segment_index (1-based) and location give the failing sample.
    """

    success: bool
    optimized_lines: tuple[Line, ...] | None = None
    error: str | None = None
    error_type: str | None = None
    segment_index: int | None = None
    location: Vec2 | None = None

    @classmethod
    def succeeded(cls, lines: Sequence[Line] | None = None) -> OptimizationResult:
        return cls(True, optimized_lines=None if lines is None else tuple(lines))

    @classmethod
    def failed(cls, message: str, error: Exception | None = None) -> OptimizationResult:
        et = type(error).__name__ if error is not None else None
        if isinstance(error, CollisionError):
            return cls(
                False,
                error=message,
                error_type=et,
                segment_index=error.segment_index,
                location=Vec2(error.x, error.y),
            )
        return cls(False, error=message, error_type=et)

    def without_lines(self) -> OptimizationResult:
        return dataclasses.replace(self, optimized_lines=None)

    def to_dict(self) -> OptimizationResultDict:
        """{success, optimizedLines?, error?} as exchanged with the editing layer."""
        out: dict[str, Any] = {"success": self.success}
        if self.optimized_lines is not None:
            out["optimizedLines"] = [encode_line(line) for line in self.optimized_lines]
        if self.error is not None:
            out["error"] = self.error
        return cast(OptimizationResultDict, out)


def samples_per_segment(quality: int) -> int:
    """Sampling intervals for a curved segment at the given quality."""
    return max(MIN_SAMPLES_PER_SEGMENT, int(quality) * SAMPLES_QUALITY_MULTIPLIER)


def smooth_control_points(
    start: Vec2, end: Vec2, control_points: Sequence[Vec2], quality: int
) -> tuple[Vec2, ...]:
    """
    Pull each control point toward the start-end midpoint.

    p += (mid - p) * (quality / SMOOTHING_SCALE) * SMOOTHING_MULTIPLIER
    Straight segments (no control points) stay straight.
    """
    if not control_points:
        return ()
    factor = (quality / SMOOTHING_SCALE) * SMOOTHING_MULTIPLIER
    mx = (start.x + end.x) / 2.0
    my = (start.y + end.y) / 2.0
    return tuple(Vec2(cp.x + (mx - cp.x) * factor, cp.y + (my - cp.y) * factor) for cp in control_points)


class PathOptimizer:
    """Sampling-based feasibility checker with a bounded smoothing pass"""

    def __init__(
        self,
        settings: Settings,
        shapes: Sequence[Shape] = (),
        interpolate_straight: bool = INTERPOLATE_STRAIGHT_SEGMENTS,
    ):
        """
        Initialize optimizer

        Args:
            settings: Robot footprint, safety margin and optimization quality
            shapes: Obstacle polygons
            interpolate_straight: Sample straight segments at the curve density
                instead of only their endpoints
        """
        self.settings = settings
        self.shapes = tuple(shapes)
        self.interpolate_straight = interpolate_straight
        self.quality = self._clamp_quality(settings.optimization_quality)

    @staticmethod
    def _clamp_quality(quality: int) -> int:
        q = int(quality)
        if q < QUALITY_MIN or q > QUALITY_MAX:
            clamped = max(QUALITY_MIN, min(QUALITY_MAX, q))
            logger.warning(f"Optimization quality {quality} outside [{QUALITY_MIN}, {QUALITY_MAX}]; using {clamped}")
            return clamped
        return q

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def optimize(self, start_point: Waypoint | None, lines: Sequence[Line] | None) -> OptimizationResult:
        """
        Check every segment for collisions, then smooth control points.

        Returns a successful result carrying the new lines, or a failed result
        naming the first colliding segment and sample. Never raises.
        """
        try:
            optimized = self._run(start_point, lines, smooth=True)
        except InvalidInputError as e:
            logger.info(f"Optimization rejected: {e}")
            return OptimizationResult.failed(str(e), e)
        except CollisionError as e:
            logger.info(str(e))
            return OptimizationResult.failed(str(e), e)
        except Exception as e:
            logger.exception("Unexpected optimizer failure")
            return OptimizationResult.failed(f"Optimization failed: {e}", e)
        return OptimizationResult.succeeded(optimized)

    def validate(self, start_point: Waypoint | None, lines: Sequence[Line] | None) -> OptimizationResult:
        """Same checks as optimize(), without smoothing; never carries lines."""
        try:
            self._run(start_point, lines, smooth=False)
        except InvalidInputError as e:
            return OptimizationResult.failed(str(e), e)
        except CollisionError as e:
            logger.debug(str(e))
            return OptimizationResult.failed(str(e), e)
        except Exception as e:
            logger.exception("Unexpected validation failure")
            return OptimizationResult.failed(f"Optimization failed: {e}", e)
        return OptimizationResult.succeeded()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, start_point: Waypoint | None, lines: Sequence[Line] | None, smooth: bool) -> list[Line]:
        if start_point is None or not lines:
            raise InvalidInputError("Invalid path: No waypoints defined")

        optimized: list[Line] = []
        current = start_point.position
        for i, line in enumerate(lines):
            end = line.end_point.position
            samples = self.segment_samples(current, line)
            logger.trace(f"Segment {i + 1}: {len(samples)} samples")  # type: ignore[attr-defined]
            self._check_samples(i + 1, current, line, samples)

            if smooth and line.control_points:
                smoothed = smooth_control_points(current, end, line.control_points, self.quality)
                logger.debug(f"Segment {i + 1}: smoothed {len(smoothed)} control points")
                optimized.append(line.with_control_points(smoothed))
            else:
                optimized.append(line)
            # Later segments start from the original waypoint, not smoothed geometry
            current = end
        return optimized

    def segment_samples(self, start: Vec2, line: Line) -> list[Vec2]:
        """Sample positions checked for one segment, both ends included."""
        end = line.end_point.position
        if line.control_points:
            return sample_curve([start, *line.control_points, end], samples_per_segment(self.quality))
        if self.interpolate_straight:
            return sample_curve([start, end], samples_per_segment(self.quality))
        return [start, end]

    def _check_samples(self, segment_index: int, start: Vec2, line: Line, samples: list[Vec2]) -> None:
        end = line.end_point.position
        last = len(samples) - 1
        for j, sample in enumerate(samples):
            prev_sample = samples[j - 1] if j > 0 else start
            next_sample = samples[j + 1] if j < last else end
            if j == last:
                heading = heading_at(line.end_point, 1.0, (prev_sample, end))
            else:
                # Mid-segment samples face along the local tangent whatever the
                # waypoint's heading mode
                heading = direction_deg(prev_sample, next_sample)

            kind, _shape = check_robot_collision(sample, heading, self.settings, self.shapes)
            if kind is CollisionKind.BOUNDS:
                raise BoundsViolationError(segment_index, sample.x, sample.y)
            if kind is CollisionKind.OBSTACLE:
                raise CollisionError(segment_index, sample.x, sample.y)


def _build(settings: Settings, shapes: Sequence[Shape] | None) -> PathOptimizer | OptimizationResult:
    try:
        return PathOptimizer(settings, shapes)
    except (AttributeError, TypeError, ValueError) as e:
        logger.error(f"Rejected optimizer arguments: {e}")
        return OptimizationResult.failed(f"Optimization failed: {e}", e)


def optimize(
    start_point: Waypoint | None,
    lines: Sequence[Line] | None,
    shapes: Sequence[Shape] | None,
    settings: Settings,
) -> OptimizationResult:
    """Convenience wrapper around PathOptimizer.optimize(); never raises."""
    opt = _build(settings, shapes)
    if isinstance(opt, OptimizationResult):
        return opt
    return opt.optimize(start_point, lines)


def validate(
    start_point: Waypoint | None,
    lines: Sequence[Line] | None,
    shapes: Sequence[Shape] | None,
    settings: Settings,
) -> OptimizationResult:
    """Convenience wrapper around PathOptimizer.validate(); never raises."""
    opt = _build(settings, shapes)
    if isinstance(opt, OptimizationResult):
        return opt
    return opt.validate(start_point, lines)
