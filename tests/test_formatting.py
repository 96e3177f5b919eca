"""Tests for display formatting."""

import pytest

from aftershock_forecast.core import ForecastResult
from aftershock_forecast.utils.formatting import (
    format_percentage,
    format_range,
    format_result,
    format_value,
)


class TestFormatValue:
    """Expected counts: integer, one or two significant figures."""

    @pytest.mark.parametrize("value, expected", [
        (150.4, "150"),
        (100.0, "100"),
        (1234.5, "1235"),
        (12.34, "12"),
        (5.67, "5.7"),
        (1.0, "1"),
        (0.123, "0.1"),
        (0.0456, "0.05"),
        (0.0, "0"),
    ])
    def test_values(self, value, expected):
        assert format_value(value) == expected

    def test_just_under_one_hundred(self):
        # Two significant figures round up to 100
        assert format_value(99.7) == "100"

    @pytest.mark.parametrize("value, expected", [
        (0.0012, "0.001"),
        (5e-05, "0.00005"),
        (7.5e-06, "0.000008"),
        (1e-06, "0.000001"),
    ])
    def test_small_values_stay_decimal(self, value, expected):
        assert format_value(value) == expected

    def test_tiny_values_use_exponent(self):
        assert format_value(5e-08) == "5e-08"


class TestFormatPercentage:
    """Probabilities saturate at both ends."""

    @pytest.mark.parametrize("value, expected", [
        (99.5, ">99%"),
        (100.0, ">99%"),
        (99.0, "99%"),
        (42.4, "42%"),
        (42.5, "43%"),
        (1.0, "1%"),
        (0.5, "<1%"),
        (0.0, "<1%"),
    ])
    def test_values(self, value, expected):
        assert format_percentage(value) == expected


class TestFormatResult:
    """Band display strings."""

    def test_range(self):
        assert format_range(3, 17) == "3-17"

    def test_result(self):
        result = ForecastResult(
            expected_count=10.0,
            lower_bound=4,
            upper_bound=17,
            probability_percent=99.995,
        )
        assert format_result(result) == {
            "average": "10",
            "range": "4-17",
            "probability": ">99%",
        }
