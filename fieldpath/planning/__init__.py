from .optimizer import OptimizationResult, PathOptimizer, optimize, validate
from .playback import PlaybackController, PlaybackState, advance, sample_robot_state

__all__ = [
    "OptimizationResult",
    "PathOptimizer",
    "optimize",
    "validate",
    "PlaybackController",
    "PlaybackState",
    "advance",
    "sample_robot_state",
]
