"""
Central configuration for cncvm tunables and shared constants.
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

logger = logging.getLogger(__name__)

MM_PER_INCH: float = 25.4

# Relative start/end radius mismatch accepted for an arc (1 %)
ARC_RADIUS_TOLERANCE: float = 0.01

LOG_LEVEL_DEFAULT: str = os.getenv("CNCVM_LOG_LEVEL", "INFO").upper()

# Decimal places written by the G-code generator
GCODE_PRECISION: int = 4


def _env_positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


# Arc linearization tolerances (mm)
MAX_ARC_DEVIATION: float = _env_positive_float("CNCVM_MAX_ARC_DEVIATION", 0.002)
MIN_ARC_LINE_LENGTH: float = _env_positive_float("CNCVM_MIN_ARC_LINE_LENGTH", 0.01)
