"""
Central configuration for fieldpath tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("FIELDPATH_TRACE", "0")).lower() in ("1", "true", "yes", "on")

LOG_LEVEL_DEFAULT: str = os.getenv("FIELDPATH_LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)

# Field bounds (inches); the field is square, 0..FIELD_SIZE on both axes
FIELD_SIZE: float = 144.0

# Determinant magnitude below which two segments are treated as parallel
PARALLEL_THRESHOLD: float = 1e-10

# Smoothing strength = (quality / SMOOTHING_SCALE) * SMOOTHING_MULTIPLIER
SMOOTHING_SCALE: float = 10.0
SMOOTHING_MULTIPLIER: float = 0.1

# Curved segments are sampled at max(MIN, quality * MULTIPLIER) intervals
MIN_SAMPLES_PER_SEGMENT: int = 10
SAMPLES_QUALITY_MULTIPLIER: int = 10


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    s = raw.strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return default


# Straight segments are sampled at the curve density when set; otherwise only
# their two endpoints are checked
INTERPOLATE_STRAIGHT_SEGMENTS: bool = _env_bool("FIELDPATH_INTERPOLATE_STRAIGHT", True)

QUALITY_MIN: int = 1
QUALITY_MAX: int = 10


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}; using {default}")
        return default


# Parameter offset used to sample the curve on either side of t for tangents
TANGENT_OFFSET: float = _env_float("FIELDPATH_TANGENT_OFFSET", 0.01)

# Playback percent is held just under 100 so the last segment index stays valid
PERCENT_EPSILON: float = 1e-9

# Percent advanced per (10 ms of frame time), divided by the segment count
PLAYBACK_RATE: float = _env_float("FIELDPATH_PLAYBACK_RATE", 0.65)


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure root logging for command-line and test use.

    Args:
        level: Level name or number; falls back to TRACE when FIELDPATH_TRACE is
            set, otherwise FIELDPATH_LOG_LEVEL.
    """
    if level is None:
        level = TRACE if TRACE_ENABLED else LOG_LEVEL_DEFAULT
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
