"""
Forecast engine for the aftershock forecaster.

Contains the Omori integral, the expected-count model, the Poisson quantile
estimator, parameter validation and the forecast assembler.
"""

from aftershock_forecast.engine.omori import (
    omori_integral,
    expected_count,
    MAGNITUDE_BIN_HALF_WIDTH,
)

from aftershock_forecast.engine.poisson import (
    poisson_quantile,
    poisson_cdf,
    inverse_normal_cdf,
    MAX_POISSON_TERMS,
    NORMAL_APPROXIMATION_THRESHOLD,
)

from aftershock_forecast.engine.validation import (
    PARAMETER_BOUNDS,
    validate_parameters,
    validate_request,
    validate_thresholds,
)

from aftershock_forecast.engine.forecast import (
    ForecastAssembler,
    duration_forecast,
    calculate_forecasts,
    probability_of_any,
)

__all__ = [
    # Omori / Gutenberg-Richter
    "omori_integral",
    "expected_count",
    "MAGNITUDE_BIN_HALF_WIDTH",
    # Poisson
    "poisson_quantile",
    "poisson_cdf",
    "inverse_normal_cdf",
    "MAX_POISSON_TERMS",
    "NORMAL_APPROXIMATION_THRESHOLD",
    # Validation
    "PARAMETER_BOUNDS",
    "validate_parameters",
    "validate_request",
    "validate_thresholds",
    # Assembler
    "ForecastAssembler",
    "duration_forecast",
    "calculate_forecasts",
    "probability_of_any",
]
