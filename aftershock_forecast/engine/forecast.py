"""
Forecast Assembler

Combines the Omori integral, the Gutenberg-Richter expected-count model and
the Poisson quantile estimator into per-band forecasts.

For each forecast window:
1. Integrate the Omori kernel once over the window
2. Evaluate cumulative expected counts N(m1), N(m2), N(m3)
3. Difference them into bands: M1+ = N(m1), M2-M1 = N(m2) - N(m1),
   M3-M2 = N(m3) - N(m2)
4. P(one or more) = 1 - exp(-count), 95% range from Poisson quantiles
"""

import logging
import math
from typing import List, Mapping, Optional

from aftershock_forecast.config.presets import (
    CUSTOM_PRESET_CODE,
    PRESETS,
    ModelPreset,
    get_default_preset,
    get_preset,
)
from aftershock_forecast.config.settings import CONFIDENCE_LOWER, CONFIDENCE_UPPER
from aftershock_forecast.core import (
    CalculationResults,
    DurationForecast,
    ForecastRequest,
    ForecastResult,
    ForecastWindow,
    InvalidInputError,
    ModelParameters,
)
from aftershock_forecast.data.events import elapsed_days, ensure_utc
from aftershock_forecast.engine.omori import expected_count, omori_integral
from aftershock_forecast.engine.poisson import poisson_quantile
from aftershock_forecast.engine.validation import validate_parameters, validate_request

logger = logging.getLogger(__name__)


# =============================================================================
# BAND RESULTS
# =============================================================================


def probability_of_any(count: float) -> float:
    """Percent chance of one or more events for a Poisson mean."""
    return 100.0 * (1.0 - math.exp(-count))


def band_result(count: float) -> ForecastResult:
    """Build the forecast for one band from its expected count."""
    return ForecastResult(
        expected_count=count,
        lower_bound=int(poisson_quantile(CONFIDENCE_LOWER, count)),
        upper_bound=int(poisson_quantile(CONFIDENCE_UPPER, count)),
        probability_percent=probability_of_any(count),
    )


def duration_forecast(
    duration: float,
    main_magnitude: float,
    m1: float,
    m2: float,
    m3: float,
    range_start_from_quake_time: float,
    params: ModelParameters,
) -> DurationForecast:
    """
    Forecast the three magnitude bands over one window.

    Threshold ordering (m1 > m2 > m3) is the caller's responsibility and is
    not re-checked here.

    Args:
        duration: Window length in days
        main_magnitude: Main shock magnitude
        m1: Highest threshold
        m2: Middle threshold
        m3: Lowest threshold
        range_start_from_quake_time: Window start, days after the main shock
        params: Model parameters

    Returns:
        DurationForecast for the window

    Raises:
        InvalidInputError: If duration is not a positive finite number, the
            window starts before the main shock, or a magnitude is not finite
    """
    if not all(math.isfinite(m) for m in (main_magnitude, m1, m2, m3)):
        message = "Magnitudes must be finite numbers"
        raise InvalidInputError(message, [("magnitude", message)])

    window = ForecastWindow(range_start=range_start_from_quake_time, duration=duration)

    integral = omori_integral(window.range_start, window.range_end, params.c, params.p)

    n1 = expected_count(params.a, params.b, main_magnitude, m1, integral)
    n2 = expected_count(params.a, params.b, main_magnitude, m2, integral)
    n3 = expected_count(params.a, params.b, main_magnitude, m3, integral)

    band1 = n1
    band2 = n2 - n1
    band3 = n3 - n2

    logger.debug(
        f"Window {window.range_start:.4f}-{window.range_end:.4f}d: integral={integral:.6g}, "
        f"bands=({band1:.4g}, {band2:.4g}, {band3:.4g})"
    )

    return DurationForecast(
        duration=duration,
        m1=band_result(band1),
        m2=band_result(band2),
        m3=band_result(band3),
    )


# =============================================================================
# ASSEMBLER
# =============================================================================


class ForecastAssembler:
    """
    Runs aftershock forecasts for full requests.

    The preset registry is injected rather than looked up globally, so a
    caller (or test) can supply its own set of regimes. Every preset code a
    request names is resolved against this registry.
    """

    def __init__(self, presets: Optional[Mapping[str, ModelPreset]] = None):
        """
        Initialize the assembler.

        Args:
            presets: Read-only mapping of preset code to ModelPreset.
                    If None, uses the built-in PRESETS.
        """
        self.presets = presets if presets is not None else PRESETS

    def resolve_model(
        self,
        preset_code: Optional[str] = None,
        parameters: Optional[ModelParameters] = None,
        overrides: Optional[Mapping[str, float]] = None,
    ) -> ModelPreset:
        """
        Pick the model for a forecast.

        Explicit parameters are used as given. Otherwise the preset (or the
        default preset) is looked up in this assembler's registry and any
        overrides are applied on top of it.

        Args:
            preset_code: Registry code, case-insensitive
            parameters: Complete parameter set, instead of a preset
            overrides: Values replacing some of the preset's parameters

        Returns:
            The registry preset itself when nothing was changed, otherwise a
            ModelPreset with code CUSTOM_PRESET_CODE

        Raises:
            KeyError: If the preset code is not in the registry
            InvalidInputError: If explicit parameters are combined with a
                preset or overrides, an override names an unknown
                parameter, or the result has c <= 0
        """
        if parameters is not None:
            if overrides or (preset_code and preset_code.lower() != CUSTOM_PRESET_CODE):
                message = "Give either a preset (with overrides) or explicit parameters, not both"
                raise InvalidInputError(message, [("parameters", message)])
            return ModelPreset(
                code=CUSTOM_PRESET_CODE,
                name="Custom",
                description="User-supplied parameters",
                parameters=parameters,
            )

        if preset_code:
            preset = get_preset(preset_code, self.presets)
        else:
            preset = get_default_preset(self.presets)
        if not overrides:
            return preset

        values = preset.parameters.as_dict()
        unknown = sorted(set(overrides) - set(values))
        if unknown:
            message = f"Unknown model parameter(s): {', '.join(unknown)}"
            raise InvalidInputError(message, [("parameters", message)])
        values.update(overrides)

        return ModelPreset(
            code=CUSTOM_PRESET_CODE,
            name=f"Custom (based on {preset.name})",
            description=preset.description,
            parameters=ModelParameters(**values),
        )

    def resolve_parameters(
        self,
        preset_code: Optional[str] = None,
        parameters: Optional[ModelParameters] = None,
        overrides: Optional[Mapping[str, float]] = None,
    ) -> ModelParameters:
        """Parameters of the model picked by resolve_model()."""
        return self.resolve_model(preset_code, parameters, overrides).parameters

    def duration_forecast(
        self,
        duration: float,
        main_magnitude: float,
        m1: float,
        m2: float,
        m3: float,
        range_start_from_quake_time: float,
        params: ModelParameters,
    ) -> DurationForecast:
        """Forecast a single window. See duration_forecast()."""
        return duration_forecast(
            duration, main_magnitude, m1, m2, m3, range_start_from_quake_time, params
        )

    def calculate(self, request: ForecastRequest) -> CalculationResults:
        """
        Forecast every window of a request.

        Args:
            request: Main shock details, windows, thresholds and model choice

        Returns:
            CalculationResults with one DurationForecast per duration, in
            request order, and any advisory parameter warnings

        Raises:
            InvalidInputError: If any part of the request is invalid; all
                problems found are listed on the exception
            KeyError: If the request names a preset missing from the registry
        """
        quake_time = ensure_utc(request.quake_time)
        start_time = ensure_utc(request.start_time)

        errors = validate_request(
            request.magnitude,
            quake_time,
            start_time,
            request.durations,
            request.thresholds,
        )
        if errors:
            raise InvalidInputError.from_errors(errors)

        model = self.resolve_model(request.preset_code, request.parameters, request.overrides)
        params = model.parameters
        warnings = validate_parameters(params)
        for warning in warnings:
            logger.warning(warning)

        range_start = elapsed_days(quake_time, start_time)
        thresholds = request.thresholds

        forecasts: List[DurationForecast] = [
            self.duration_forecast(
                duration,
                request.magnitude,
                thresholds.m1,
                thresholds.m2,
                thresholds.m3,
                range_start,
                params,
            )
            for duration in request.durations
        ]

        logger.info(
            f"Forecast {request.quake_id or 'unnamed event'} M{request.magnitude:g} "
            f"({model.code}): {len(forecasts)} windows starting {range_start:.3f} days "
            f"after the main shock"
        )

        return CalculationResults(
            quake_id=request.quake_id,
            range_labels=thresholds.labels,
            forecasts=forecasts,
            parameters=params,
            range_start_days=range_start,
            warnings=warnings,
            preset_code=model.code,
            model_name=model.name,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def calculate_forecasts(
    request: ForecastRequest,
    presets: Optional[Mapping[str, ModelPreset]] = None,
) -> CalculationResults:
    """
    Convenience function to forecast a request with default settings.

    Args:
        request: The forecast request
        presets: Optional preset registry. Uses PRESETS if None.

    Returns:
        CalculationResults for every requested window
    """
    assembler = ForecastAssembler(presets=presets)
    return assembler.calculate(request)
