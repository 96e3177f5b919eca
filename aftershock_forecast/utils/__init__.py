"""Utility modules for the aftershock forecaster."""

from aftershock_forecast.utils.logging import setup_logging
from aftershock_forecast.utils.formatting import (
    format_value,
    format_percentage,
    format_range,
    format_result,
)

__all__ = [
    "setup_logging",
    "format_value",
    "format_percentage",
    "format_range",
    "format_result",
]
