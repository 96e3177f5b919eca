"""
Tests for the forecast assembler.

Single-window forecasts, full requests and preset injection.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Dict, Optional

import pytest

from aftershock_forecast.config import (
    CALIFORNIA,
    NZ_GENERIC,
    SUBDUCTION_ZONE,
    ModelPreset,
)
from aftershock_forecast.core import (
    Band,
    DurationForecast,
    ForecastRequest,
    InvalidInputError,
    MagnitudeThresholds,
    ModelParameters,
)
from aftershock_forecast.data import DEMO_QUAKE
from aftershock_forecast.engine.forecast import (
    ForecastAssembler,
    band_result,
    calculate_forecasts,
    duration_forecast,
    probability_of_any,
)
from aftershock_forecast.engine.omori import expected_count, omori_integral


# =============================================================================
# TEST DATA HELPERS
# =============================================================================

NZ = ModelParameters(a=-1.59, b=1.03, c=0.04, p=1.07)
QUAKE_TIME = datetime(2016, 11, 13, 11, 2, 56, tzinfo=timezone.utc)


def make_request(
    durations=(1.0, 7.0, 30.0),
    magnitude: float = 7.8,
    start_offset: timedelta = timedelta(hours=1),
    thresholds: MagnitudeThresholds = MagnitudeThresholds(m1=7, m2=6, m3=5),
    parameters: Optional[ModelParameters] = None,
    preset_code: Optional[str] = "nz",
    overrides: Optional[Dict[str, float]] = None,
) -> ForecastRequest:
    """Create a Kaikoura-like request with sensible defaults."""
    if parameters is not None:
        preset_code = None
    return ForecastRequest(
        magnitude=magnitude,
        quake_time=QUAKE_TIME,
        start_time=QUAKE_TIME + start_offset,
        durations=tuple(durations),
        thresholds=thresholds,
        parameters=parameters,
        quake_id="2016p858000",
        preset_code=preset_code,
        overrides=overrides or {},
    )


# =============================================================================
# BAND RESULTS
# =============================================================================


class TestBandResult:
    """Per-band probabilities and ranges."""

    def test_probability_of_any(self):
        assert probability_of_any(0.0) == 0.0
        assert probability_of_any(1.0) == pytest.approx(100 * (1 - math.exp(-1)))

    def test_probability_saturates(self):
        assert probability_of_any(1000.0) == pytest.approx(100.0)

    def test_bounds_are_95_percent_range(self):
        result = band_result(10.0)
        assert result.lower_bound == 4
        assert result.upper_bound == 17
        assert isinstance(result.lower_bound, int)
        assert isinstance(result.upper_bound, int)

    def test_zero_count(self):
        result = band_result(0.0)
        assert result.expected_count == 0.0
        assert result.lower_bound == 0
        assert result.upper_bound == 0
        assert result.probability_percent == 0.0


# =============================================================================
# DURATION FORECAST
# =============================================================================


class TestDurationForecast:
    """One window, three bands."""

    def test_bands_are_differences_of_cumulative_counts(self):
        forecast = duration_forecast(7.0, 7.8, 5.0, 4.0, 3.0, 0.5, NZ)

        integral = omori_integral(0.5, 7.5, NZ.c, NZ.p)
        n5 = expected_count(NZ.a, NZ.b, 7.8, 5.0, integral)
        n4 = expected_count(NZ.a, NZ.b, 7.8, 4.0, integral)
        n3 = expected_count(NZ.a, NZ.b, 7.8, 3.0, integral)

        assert forecast.m1.expected_count == pytest.approx(n5)
        assert forecast.m2.expected_count == pytest.approx(n4 - n5)
        assert forecast.m3.expected_count == pytest.approx(n3 - n4)

    def test_bands_sum_to_lowest_cumulative_count(self):
        forecast = duration_forecast(30.0, 6.2, 5.0, 4.0, 3.0, 0.0, NZ)
        total = sum(r.expected_count for r in forecast.results.values())

        integral = omori_integral(0.0, 30.0, NZ.c, NZ.p)
        assert total == pytest.approx(expected_count(NZ.a, NZ.b, 6.2, 3.0, integral))

    def test_keeps_duration(self):
        forecast = duration_forecast(7.0, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)
        assert isinstance(forecast, DurationForecast)
        assert forecast.duration == 7.0
        assert forecast.band(Band.M1) is forecast.m1

    def test_longer_window_gives_more_events(self):
        day = duration_forecast(1.0, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)
        tenth = duration_forecast(0.1, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)

        assert day.m1.expected_count > tenth.m1.expected_count
        assert day.m1.probability_percent > tenth.m1.probability_percent

    def test_lower_threshold_gives_more_events(self):
        m5 = duration_forecast(1.0, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)
        m4 = duration_forecast(1.0, 7.8, 4.0, 3.0, 2.0, 0.0, NZ)
        assert m5.m1.expected_count <= m4.m1.expected_count

    def test_output_guarantees(self):
        forecast = duration_forecast(7.0, 5.4, 5.0, 4.0, 3.0, 2.0, NZ)
        for result in forecast.results.values():
            assert result.expected_count >= 0
            assert 0 <= result.probability_percent <= 100
            assert 0 <= result.lower_bound <= result.upper_bound

    def test_large_counts_use_normal_range(self):
        forecast = duration_forecast(30.0, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)
        m3 = forecast.m3
        assert m3.expected_count > 100
        assert m3.lower_bound < m3.expected_count < m3.upper_bound

    def test_p_equal_one_preset(self):
        scr = ModelParameters(a=-2.5, b=1.0, c=0.05, p=1.0)
        forecast = duration_forecast(7.0, 6.0, 5.0, 4.0, 3.0, 0.0, scr)
        assert forecast.m1.expected_count > 0

    @pytest.mark.parametrize("duration", [0.0, -1.0])
    def test_non_positive_duration_fails(self, duration):
        with pytest.raises(InvalidInputError):
            duration_forecast(duration, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)

    def test_start_before_main_shock_fails(self):
        with pytest.raises(InvalidInputError):
            duration_forecast(1.0, 7.8, 5.0, 4.0, 3.0, -1.0, NZ)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            duration_forecast(0.0, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)

    @pytest.mark.parametrize("duration", [math.nan, math.inf])
    def test_non_finite_duration_fails(self, duration):
        with pytest.raises(InvalidInputError):
            duration_forecast(duration, 7.8, 5.0, 4.0, 3.0, 0.0, NZ)

    def test_nan_start_fails(self):
        with pytest.raises(InvalidInputError):
            duration_forecast(1.0, 7.8, 5.0, 4.0, 3.0, math.nan, NZ)

    def test_nan_magnitude_fails(self):
        with pytest.raises(InvalidInputError):
            duration_forecast(1.0, math.nan, 5.0, 4.0, 3.0, 0.0, NZ)


# =============================================================================
# ASSEMBLER
# =============================================================================


class TestForecastAssembler:
    """Full requests through the assembler."""

    def test_one_forecast_per_duration_in_order(self):
        results = calculate_forecasts(make_request(durations=(30.0, 1.0, 7.0)))
        assert [f.duration for f in results.forecasts] == [30.0, 1.0, 7.0]

    def test_range_labels(self):
        results = calculate_forecasts(make_request())
        assert results.range_labels == {
            Band.M1: "M7+",
            Band.M2: "M6-M7",
            Band.M3: "M5-M6",
        }

    def test_start_offset_in_days(self):
        results = calculate_forecasts(make_request(start_offset=timedelta(hours=12)))
        assert results.range_start_days == pytest.approx(0.5)

    def test_matches_single_window_forecast(self):
        results = calculate_forecasts(make_request(durations=(7.0,)))
        direct = duration_forecast(7.0, 7.8, 7.0, 6.0, 5.0, 1.0 / 24, NZ)
        assert results.forecasts[0].m1.expected_count == pytest.approx(direct.m1.expected_count)

    def test_counts_grow_with_duration(self):
        results = calculate_forecasts(make_request())
        counts = [f.m3.expected_count for f in results.forecasts]
        assert counts == sorted(counts)

    def test_plausible_parameters_have_no_warnings(self):
        results = calculate_forecasts(make_request())
        assert results.warnings == []
        assert results.parameters == NZ

    def test_implausible_parameters_warn_but_compute(self, caplog):
        params = ModelParameters(a=-5.0, b=1.03, c=0.04, p=1.07)
        with caplog.at_level(logging.WARNING, logger="aftershock_forecast.engine.forecast"):
            results = calculate_forecasts(make_request(parameters=params))

        assert len(results.forecasts) == 3
        assert len(results.warnings) == 1
        assert "'a'" in results.warnings[0]
        assert "'a'" in caplog.text

    def test_naive_times_are_utc(self):
        request = ForecastRequest(
            magnitude=7.8,
            quake_time=datetime(2016, 11, 13, 11, 2, 56),
            start_time=QUAKE_TIME + timedelta(days=1),
            durations=(1.0,),
            thresholds=MagnitudeThresholds(m1=7, m2=6, m3=5),
            parameters=NZ,
        )
        results = calculate_forecasts(request)
        assert results.range_start_days == pytest.approx(1.0)

    def test_collects_all_request_errors(self):
        request = make_request(
            magnitude=11.0,
            durations=(0.0, 7.0),
            start_offset=timedelta(hours=-1),
        )
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_forecasts(request)

        fields = {field for field, _ in exc_info.value.errors}
        assert fields == {"magnitude", "start_time", "duration"}

    def test_empty_durations_fail(self):
        with pytest.raises(InvalidInputError):
            calculate_forecasts(make_request(durations=()))

    def test_too_long_duration_fails(self):
        with pytest.raises(InvalidInputError):
            calculate_forecasts(make_request(durations=(1000.0,)))

    def test_demo_quake_forecast(self):
        request = ForecastRequest(
            magnitude=DEMO_QUAKE.magnitude,
            quake_time=DEMO_QUAKE.quake_time,
            start_time=DEMO_QUAKE.quake_time + timedelta(hours=1),
            durations=(1.0, 7.0, 30.0),
            thresholds=MagnitudeThresholds(m1=7, m2=6, m3=5),
            parameters=NZ_GENERIC.parameters,
            quake_id=DEMO_QUAKE.quake_id,
        )
        results = ForecastAssembler().calculate(request)
        assert results.quake_id == "2016p858000"
        assert len(results.forecasts) == 3


class TestPresetInjection:
    """Presets come from the mapping given to the assembler."""

    @staticmethod
    def registry(*presets: ModelPreset):
        return MappingProxyType({preset.code: preset for preset in presets})

    def test_default_registry(self):
        assembler = ForecastAssembler()
        assert assembler.resolve_parameters("nz") == NZ_GENERIC.parameters

    def test_default_preset_when_no_code(self):
        assert ForecastAssembler().resolve_parameters() == NZ_GENERIC.parameters

    def test_custom_registry(self):
        custom = ModelPreset(
            code="test",
            name="Test Regime",
            description="Fixture",
            parameters=ModelParameters(a=-2.0, b=1.0, c=0.1, p=1.2),
        )
        assembler = ForecastAssembler(presets=self.registry(custom))

        assert assembler.resolve_parameters("TEST") == custom.parameters
        with pytest.raises(KeyError):
            assembler.resolve_parameters("nz")

    def test_request_preset_resolved_from_injected_registry(self):
        assembler = ForecastAssembler(presets=self.registry(CALIFORNIA))
        with pytest.raises(KeyError, match="california"):
            assembler.calculate(make_request(preset_code="nz"))

    def test_injected_registry_changes_result(self):
        # Same code, different regime behind it
        swapped = ModelPreset(
            code="nz",
            name="Swapped",
            description="Subduction values under the NZ code",
            parameters=SUBDUCTION_ZONE.parameters,
        )
        default = ForecastAssembler().calculate(make_request(preset_code="nz"))
        injected = ForecastAssembler(presets=self.registry(swapped)).calculate(
            make_request(preset_code="nz")
        )

        assert injected.parameters == SUBDUCTION_ZONE.parameters
        assert injected.model_name == "Swapped"
        assert (
            injected.forecasts[0].m1.expected_count
            != pytest.approx(default.forecasts[0].m1.expected_count)
        )

    def test_calculate_forwards_registry(self):
        results = calculate_forecasts(
            make_request(preset_code="california"),
            presets=self.registry(CALIFORNIA),
        )
        assert results.preset_code == "california"
        assert results.parameters == CALIFORNIA.parameters

    def test_preset_reported_on_results(self):
        results = calculate_forecasts(make_request(preset_code="NZ"))
        assert results.preset_code == "nz"
        assert results.model_name == "NZ Generic"

    def test_overrides_build_custom_model(self):
        results = calculate_forecasts(make_request(preset_code="sz", overrides={"a": -1.8}))

        assert results.preset_code == "custom"
        assert results.model_name == "Custom (based on Subduction Zone)"
        assert results.parameters == ModelParameters(a=-1.8, b=1.0, c=0.018, p=0.92)

    def test_unknown_override_fails(self):
        with pytest.raises(InvalidInputError, match=r"parameter\(s\): q"):
            ForecastAssembler().resolve_parameters("nz", overrides={"q": 1.0})

    def test_override_to_non_positive_c_fails(self):
        with pytest.raises(InvalidInputError):
            ForecastAssembler().resolve_parameters("nz", overrides={"c": 0.0})

    def test_explicit_parameters_are_custom(self):
        params = ModelParameters(a=-1.0, b=1.0, c=0.01, p=1.1)
        model = ForecastAssembler(presets=self.registry()).resolve_model(parameters=params)

        assert model.code == "custom"
        assert model.parameters is params

    def test_explicit_parameters_with_preset_fail(self):
        params = ModelParameters(a=-1.0, b=1.0, c=0.01, p=1.1)
        with pytest.raises(InvalidInputError):
            ForecastAssembler().resolve_parameters("sz", params)
        with pytest.raises(InvalidInputError):
            ForecastAssembler().resolve_parameters(parameters=params, overrides={"a": -2.0})
