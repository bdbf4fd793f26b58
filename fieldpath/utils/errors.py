"""
Custom exception types for the fieldpath geometry/optimization pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class FieldPathError(RuntimeError):
    """Base class for failures reported by the planning engine."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(message)

    def __str__(self):
        return self.original_message


class InvalidInputError(FieldPathError):
    """Empty/missing trajectory, malformed document or inconsistent waypoint."""


class CollisionError(FieldPathError):
    """Robot footprint overlaps an obstacle (or leaves the field) at a sample."""

    kind = "obstacle"

    def __init__(self, segment_index: int, x: float, y: float):
        self.segment_index = segment_index
        self.x = x
        self.y = y
        super().__init__(
            f"Path collision detected at segment {segment_index}, point ({x:.1f}, {y:.1f}). "
            "The robot would hit an obstacle or leave the field bounds."
        )


class BoundsViolationError(CollisionError):
    """Robot footprint corner falls outside the field."""

    kind = "bounds"
