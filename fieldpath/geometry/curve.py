"""
Parametric curve evaluation and time-scaling helpers.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from fieldpath.models import Vec2


def evaluate_curve(t: float, points: Sequence[Vec2]) -> Vec2:
    """
    Evaluate an arbitrary-degree Bezier curve at parameter t (de Casteljau).

    Each level blends adjacent pairs as (1 - t) * a + t * b until one point is
    left, so t=0 and t=1 return the first and last points exactly. Two points
    give a straight lerp. t is not validated; callers keep it in [0, 1].
    """
    if len(points) < 2:
        raise ValueError("evaluate_curve requires at least 2 points")
    level = np.array([(p.x, p.y) for p in points], dtype=float)
    s = 1.0 - t
    while len(level) > 1:
        level = s * level[:-1] + t * level[1:]
    return Vec2(float(level[0, 0]), float(level[0, 1]))


def sample_curve(points: Sequence[Vec2], num_samples: int) -> list[Vec2]:
    """Sample num_samples + 1 evenly spaced positions, both ends included."""
    n = max(1, int(num_samples))
    return [evaluate_curve(float(t), points) for t in np.linspace(0.0, 1.0, n + 1)]


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease: accelerate to t=0.5, decelerate after (symmetric)."""
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t
