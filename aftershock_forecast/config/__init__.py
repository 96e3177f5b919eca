"""Configuration module for the aftershock forecaster."""

from aftershock_forecast.config.presets import (
    ModelPreset,
    NZ_GENERIC,
    SUBDUCTION_ZONE,
    CALIFORNIA,
    STABLE_CONTINENTAL,
    PRESETS,
    CUSTOM_PRESET_CODE,
    get_preset,
    get_default_preset,
    list_presets,
)

from aftershock_forecast.config.settings import (
    # Forecast Defaults
    DEFAULT_PRESET_CODE,
    DEFAULT_DURATIONS,
    MAX_FORECAST_DURATION_DAYS,
    # Confidence Range
    CONFIDENCE_LOWER,
    CONFIDENCE_UPPER,
    # Logging
    LOG_LEVEL,
    LOG_FORMAT,
)

__all__ = [
    # Presets
    "ModelPreset",
    "NZ_GENERIC",
    "SUBDUCTION_ZONE",
    "CALIFORNIA",
    "STABLE_CONTINENTAL",
    "PRESETS",
    "CUSTOM_PRESET_CODE",
    "get_preset",
    "get_default_preset",
    "list_presets",
    # Forecast Defaults
    "DEFAULT_PRESET_CODE",
    "DEFAULT_DURATIONS",
    "MAX_FORECAST_DURATION_DAYS",
    # Confidence Range
    "CONFIDENCE_LOWER",
    "CONFIDENCE_UPPER",
    # Logging
    "LOG_LEVEL",
    "LOG_FORMAT",
]
