"""
fieldpath Python Package

Geometry and collision-aware optimization engine for piecewise-curved robot
trajectories on a 144 x 144 inch field.

Key components:
- evaluate_curve: Bezier point evaluation over [start, *controls, end]
- heading_at: Heading for linear/constant/tangential waypoints
- optimize / validate: Sampled collision checking with control-point smoothing
- sample_robot_state: Robot pose at a playback percentage
- PlaybackController: Frame-step driver for playback
"""

from ._version import __version__
from .geometry.curve import evaluate_curve
from .geometry.heading import heading_at
from .models import EventMarker, HeadingMode, Line, RobotState, Settings, Shape, Vec2, Waypoint
from .planning.optimizer import OptimizationResult, PathOptimizer, optimize, validate
from .planning.playback import PlaybackController, PlaybackState, advance, sample_robot_state

__all__ = [
    "__version__",
    "evaluate_curve",
    "heading_at",
    "EventMarker",
    "HeadingMode",
    "Line",
    "RobotState",
    "Settings",
    "Shape",
    "Vec2",
    "Waypoint",
    "OptimizationResult",
    "PathOptimizer",
    "optimize",
    "validate",
    "PlaybackController",
    "PlaybackState",
    "advance",
    "sample_robot_state",
]
