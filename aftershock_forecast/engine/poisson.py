"""
Poisson Quantile Estimator

Inverse CDF of a Poisson(lambda) distribution, used to turn an expected
aftershock count into a confidence range.

Two numeric regimes:
- lambda <= 100: exact summation of the PMF, term by term
- lambda > 100: normal approximation N(lambda, sqrt(lambda)) with the
  Abramowitz & Stegun (26.2.23) rational inverse-normal formula
"""

import logging
import math

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Above this mean, exp(-lambda) summation is replaced by a normal approximation
NORMAL_APPROXIMATION_THRESHOLD: float = 100.0

# Hard cap on PMF terms added during exact summation
MAX_POISSON_TERMS: int = 1000

# Abramowitz & Stegun 26.2.23 coefficients (|error| < 4.5e-4)
_AS_C = (2.515517, 0.802853, 0.010328)
_AS_D = (1.432788, 0.189269, 0.001308)


# =============================================================================
# NORMAL APPROXIMATION
# =============================================================================


def inverse_normal_cdf(p: float) -> float:
    """
    Approximate the standard normal quantile z such that Phi(z) = p.

    Uses the rational approximation from Abramowitz & Stegun, formula
    26.2.23, which is computed for the upper tail and reflected about the
    median for p < 0.5.

    Args:
        p: Probability, strictly between 0 and 1

    Returns:
        Approximate z-score
    """
    if not 0.0 < p < 1.0:
        raise ValueError(f"p must be in (0, 1), got {p}")

    c0, c1, c2 = _AS_C
    d1, d2, d3 = _AS_D

    t = math.sqrt(-2.0 * math.log(p if p < 0.5 else 1.0 - p))
    z = t - (c0 + c1 * t + c2 * t * t) / (1.0 + d1 * t + d2 * t * t + d3 * t * t * t)

    return -z if p < 0.5 else z


# =============================================================================
# POISSON DISTRIBUTION
# =============================================================================


def poisson_cdf(n: int, lam: float) -> float:
    """
    Cumulative probability P(X <= n) for X ~ Poisson(lam).

    Summed term by term; intended for moderate means (lam <= 100).
    """
    if n < 0:
        return 0.0
    if lam <= 0:
        return 1.0

    term = math.exp(-lam)
    total = term
    for k in range(1, int(n) + 1):
        term = term * lam / k
        total += term
    return min(total, 1.0)


def poisson_quantile(p: float, lam: float, max_terms: int = MAX_POISSON_TERMS) -> float:
    """
    Smallest n such that P(X <= n) >= p for X ~ Poisson(lam).

    Args:
        p: Target cumulative probability
        lam: Poisson mean
        max_terms: Maximum PMF terms added before giving up (exact regime)

    Returns:
        The quantile n: 0 for lam <= 0 or p <= 0, math.inf for p >= 1.
        If max_terms is reached before the sum gets to p, the last n
        reached is returned (an under-estimate) and a warning is logged.
    """
    if lam <= 0:
        return 0
    if p <= 0:
        return 0
    if p >= 1:
        return math.inf

    if lam > NORMAL_APPROXIMATION_THRESHOLD:
        # exp(-lam) heads towards underflow and summation needs many terms
        z = inverse_normal_cdf(p)
        # Halves round up
        return max(0, math.floor(lam + z * math.sqrt(lam) + 0.5))

    term = math.exp(-lam)
    n = 0
    total = term
    remaining = max_terms

    while total < p and remaining > 0:
        n += 1
        term = term * lam / n
        total += term
        remaining -= 1

    if total < p:
        logger.warning(
            f"Poisson quantile hit the {max_terms}-term cap "
            f"(p={p}, lambda={lam}); returning n={n}, cumulative={total:.6g}"
        )

    return n
