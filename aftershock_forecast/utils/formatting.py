"""Display formatting for forecast values."""

import math
from typing import Dict

from aftershock_forecast.core import ForecastResult


# Values smaller than this are shown in exponent notation
EXPONENT_NOTATION_BELOW = 1e-6


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _significant(value: float, digits: int) -> str:
    # Round to significant figures, then drop trailing zeros
    rounded = float(f"{value:.{digits}g}")
    if rounded == 0 or abs(rounded) < EXPONENT_NOTATION_BELOW:
        return f"{rounded:g}"
    decimals = max(0, digits - 1 - math.floor(math.log10(abs(rounded))))
    text = f"{rounded:.{decimals}f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_value(value: float) -> str:
    """
    Format an expected count for display.

    - 100 and above: nearest integer
    - below 1: one significant figure
    - otherwise: two significant figures
    """
    if value >= 100:
        return str(_round_half_up(value))
    if value < 1:
        return _significant(value, 1)
    return _significant(value, 2)


def format_percentage(value: float) -> str:
    """Format a probability percentage, saturating at '<1%' and '>99%'."""
    if value > 99:
        return ">99%"
    if value < 1:
        return "<1%"
    return f"{_round_half_up(value)}%"


def format_range(lower: float, upper: float) -> str:
    """Format a confidence range as 'low-high'."""
    return f"{_round_half_up(lower)}-{_round_half_up(upper)}"


def format_result(result: ForecastResult) -> Dict[str, str]:
    """Display strings for one band: average, range and probability."""
    return {
        "average": format_value(result.expected_count),
        "range": format_range(result.lower_bound, result.upper_bound),
        "probability": format_percentage(result.probability_percent),
    }
