"""Core data models, interfaces and exceptions."""

from aftershock_forecast.core.exceptions import (
    AftershockForecastError,
    InvalidInputError,
    QuakeNotFoundError,
)

from aftershock_forecast.core.models import (
    # Enums
    Band,
    # Data classes
    ModelParameters,
    MagnitudeThresholds,
    ForecastWindow,
    ForecastResult,
    DurationForecast,
    QuakeData,
    ForecastRequest,
    CalculationResults,
    # Abstract interfaces
    QuakeDataSource,
    # Helpers
    format_magnitude,
)

__all__ = [
    "AftershockForecastError",
    "InvalidInputError",
    "QuakeNotFoundError",
    "Band",
    "ModelParameters",
    "MagnitudeThresholds",
    "ForecastWindow",
    "ForecastResult",
    "DurationForecast",
    "QuakeData",
    "ForecastRequest",
    "CalculationResults",
    "QuakeDataSource",
    "format_magnitude",
]
