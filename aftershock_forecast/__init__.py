"""
Aftershock Forecast - Omori-Utsu / Gutenberg-Richter aftershock forecasting.

Forecasts expected aftershock counts, Poisson 95% ranges and occurrence
probabilities for three magnitude bands over user-chosen forecast windows.
"""

__version__ = "0.1.0"

from aftershock_forecast.core import (
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
    # Exceptions
    AftershockForecastError,
    InvalidInputError,
    QuakeNotFoundError,
)

from aftershock_forecast.config import (
    ModelPreset,
    PRESETS,
    get_preset,
    list_presets,
)

from aftershock_forecast.engine import (
    ForecastAssembler,
    calculate_forecasts,
    duration_forecast,
    validate_parameters,
)

__all__ = [
    # Version
    "__version__",
    # Enums
    "Band",
    # Data classes
    "ModelParameters",
    "MagnitudeThresholds",
    "ForecastWindow",
    "ForecastResult",
    "DurationForecast",
    "QuakeData",
    "ForecastRequest",
    "CalculationResults",
    # Exceptions
    "AftershockForecastError",
    "InvalidInputError",
    "QuakeNotFoundError",
    # Config
    "ModelPreset",
    "PRESETS",
    "get_preset",
    "list_presets",
    # Engine
    "ForecastAssembler",
    "calculate_forecasts",
    "duration_forecast",
    "validate_parameters",
]
