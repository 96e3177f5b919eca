"""
Omori-Utsu decay and Gutenberg-Richter scaling.

The Reasenberg & Jones rate of aftershocks at or above magnitude M, t days
after a main shock of magnitude Mm, is

    rate(t, M) = 10^(a + b * (Mm - M)) * (t + c)^(-p)

so the expected count over a window is the magnitude factor times the
time integral of the Omori kernel.
"""

import math

# Tolerance for treating p as exactly 1 (logarithmic integral)
P_EQUALS_ONE_TOLERANCE: float = 1e-10

# Half the magnitude binning width; thresholds are treated as bin centres
MAGNITUDE_BIN_HALF_WIDTH: float = 0.05


def omori_integral(range_start: float, range_end: float, c: float, p: float) -> float:
    """
    Integrate (t + c)^(-p) from range_start to range_end (days).

    When p == 1 the antiderivative is ln(t + c); otherwise it is
    (t + c)^(1 - p) / (1 - p).

    Preconditions (checked by callers): range_start >= 0,
    range_end >= range_start, c > 0.
    """
    if abs(p - 1) < P_EQUALS_ONE_TOLERANCE:
        return math.log(range_end + c) - math.log(range_start + c)

    return ((range_end + c) ** (1 - p) - (range_start + c) ** (1 - p)) / (1 - p)


def expected_count(
    a: float,
    b: float,
    main_magnitude: float,
    min_magnitude: float,
    integral: float,
) -> float:
    """
    Expected number of aftershocks at or above min_magnitude.

    Args:
        a: Productivity parameter
        b: Gutenberg-Richter b-value
        main_magnitude: Main shock magnitude
        min_magnitude: Threshold magnitude
        integral: Omori integral over the forecast window

    Returns:
        10^(a + b * (main_magnitude - (min_magnitude - 0.05))) * integral
    """
    exponent = a + b * (main_magnitude - (min_magnitude - MAGNITUDE_BIN_HALF_WIDTH))
    return math.pow(10, exponent) * integral
