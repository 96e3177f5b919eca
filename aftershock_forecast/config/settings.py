"""
Global settings and constants for the aftershock forecaster.

Forecast defaults, confidence levels and logging, overridable from the
environment or a .env file.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# =============================================================================
# FORECAST DEFAULTS
# =============================================================================

# Preset used when no model is chosen explicitly
DEFAULT_PRESET_CODE = os.getenv("AFTERSHOCK_DEFAULT_PRESET", "nz")

# Forecast windows (days) used when none are given
DEFAULT_DURATIONS = tuple(
    float(d) for d in os.getenv("AFTERSHOCK_DEFAULT_DURATIONS", "1,7,30").split(",")
)

# Longest accepted forecast window
MAX_FORECAST_DURATION_DAYS = float(os.getenv("AFTERSHOCK_MAX_DURATION_DAYS", "730"))


# =============================================================================
# CONFIDENCE RANGE
# =============================================================================


def confidence_level(name: str, default: str) -> float:
    """
    Read a Poisson quantile level from the environment.

    Raises:
        ValueError: If the value is not a number strictly between 0 and 1
    """
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None
    if not 0.0 < value < 1.0:
        raise ValueError(f"{name} must be strictly between 0 and 1, got {value:g}")
    return value


# Poisson quantiles bounding the reported 95% range
CONFIDENCE_LOWER = confidence_level("AFTERSHOCK_CONFIDENCE_LOWER", "0.025")
CONFIDENCE_UPPER = confidence_level("AFTERSHOCK_CONFIDENCE_UPPER", "0.975")

if CONFIDENCE_LOWER >= CONFIDENCE_UPPER:
    raise ValueError(
        f"AFTERSHOCK_CONFIDENCE_LOWER ({CONFIDENCE_LOWER:g}) must be below "
        f"AFTERSHOCK_CONFIDENCE_UPPER ({CONFIDENCE_UPPER:g})"
    )


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(name)s - %(message)s"
