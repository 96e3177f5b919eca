"""
Input checks for aftershock forecasts.

Parameter checks are advisory: they return warnings and never block a
calculation. Request checks collect every problem with a forecast request
so they can be reported together.
"""

from datetime import datetime
from typing import Dict, List, Sequence, Tuple

from aftershock_forecast.config.settings import MAX_FORECAST_DURATION_DAYS
from aftershock_forecast.core.models import MagnitudeThresholds, ModelParameters


# Literature-derived plausibility bounds for model parameters
PARAMETER_BOUNDS: Dict[str, Dict] = {
    "a": {"min": -4.0, "max": 0.0, "description": "Productivity parameter"},
    "b": {"min": 0.5, "max": 1.5, "description": "Gutenberg-Richter b-value"},
    "c": {"min": 0.001, "max": 1.0, "description": "Omori c-value (days)"},
    "p": {"min": 0.5, "max": 2.0, "description": "Omori p-value (decay rate)"},
}

# Accepted range for threshold magnitudes
MIN_THRESHOLD_MAGNITUDE: float = 1.0
MAX_THRESHOLD_MAGNITUDE: float = 9.0

# Main shock magnitude must lie strictly inside this range
MIN_MAIN_MAGNITUDE: float = 0.0
MAX_MAIN_MAGNITUDE: float = 10.0


def validate_parameters(params: ModelParameters) -> List[str]:
    """
    Check model parameters against literature bounds.

    Args:
        params: Parameter set to check

    Returns:
        One warning per out-of-bounds parameter; empty if all are plausible
    """
    warnings = []
    values = params.as_dict()

    for name, bounds in PARAMETER_BOUNDS.items():
        value = values[name]
        if value < bounds["min"] or value > bounds["max"]:
            warnings.append(
                f"Parameter '{name}' ({value:g}) should be between "
                f"{bounds['min']:g} and {bounds['max']:g}"
            )

    return warnings


def validate_thresholds(m1: float, m2: float, m3: float) -> List[Tuple[str, str]]:
    """Check threshold ordering and range; returns (field, message) errors."""
    errors = []
    if not m1 <= MAX_THRESHOLD_MAGNITUDE:
        errors.append(("magnitude_ranges", f"M1 must be {MAX_THRESHOLD_MAGNITUDE:g} or less"))
    if not m2 < m1:
        errors.append(("magnitude_ranges", "M2 must be less than M1"))
    if not m3 < m2:
        errors.append(("magnitude_ranges", "M3 must be less than M2"))
    if not m3 >= MIN_THRESHOLD_MAGNITUDE:
        errors.append(("magnitude_ranges", f"M3 must be at least {MIN_THRESHOLD_MAGNITUDE:g}"))
    return errors


def validate_request(
    magnitude: float,
    quake_time: datetime,
    start_time: datetime,
    durations: Sequence[float],
    thresholds: MagnitudeThresholds,
) -> List[Tuple[str, str]]:
    """
    Collect every problem with a forecast request.

    Args:
        magnitude: Main shock magnitude
        quake_time: Main shock origin time
        start_time: Start of the forecast windows
        durations: Forecast window lengths in days
        thresholds: Band thresholds

    Returns:
        List of (field, message) pairs; empty if the request is valid
    """
    errors: List[Tuple[str, str]] = []

    if not magnitude > MIN_MAIN_MAGNITUDE:
        errors.append(("magnitude", "Please enter a valid magnitude greater than 0"))
    elif magnitude >= MAX_MAIN_MAGNITUDE:
        errors.append(("magnitude", f"Magnitude must be less than {MAX_MAIN_MAGNITUDE:g}"))

    errors.extend(validate_thresholds(thresholds.m1, thresholds.m2, thresholds.m3))

    if quake_time > start_time:
        errors.append(("start_time", "Forecast start time must be after quake time"))

    if not durations:
        errors.append(("duration", "At least one forecast duration is required"))

    for i, duration in enumerate(durations, start=1):
        if not duration > 0:
            errors.append(("duration", f"Forecast duration {i} must be positive"))
        elif duration > MAX_FORECAST_DURATION_DAYS:
            errors.append((
                "duration",
                f"Forecast duration {i} must be at most {MAX_FORECAST_DURATION_DAYS:g} days",
            ))

    return errors
