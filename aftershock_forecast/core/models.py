"""
Data models for the aftershock forecast engine.

All entities are immutable value objects: they are built fresh for every
calculation and replaced wholesale when any input changes.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from aftershock_forecast.core.exceptions import InvalidInputError


# =============================================================================
# ENUMS
# =============================================================================

class Band(Enum):
    """Magnitude band of a forecast, named after its lower threshold."""
    M1 = "m1"   # M >= m1 (largest events)
    M2 = "m2"   # m2 <= M < m1
    M3 = "m3"   # m3 <= M < m2 (smallest events)


def format_magnitude(magnitude: float) -> str:
    """Render a threshold magnitude without a trailing '.0'."""
    return f"{magnitude:g}"


# =============================================================================
# DATA CLASSES - MODEL INPUTS
# =============================================================================

@dataclass(frozen=True)
class ModelParameters:
    """
    Reasenberg-Jones style aftershock model parameters.

    All values must be finite and c must be positive (it keeps the Omori
    kernel finite at t=0). Beyond that the values only have advisory
    literature bounds, see aftershock_forecast.engine.validation.
    """
    a: float    # Productivity (log10 scale)
    b: float    # Gutenberg-Richter slope
    c: float    # Omori time offset (days)
    p: float    # Omori decay exponent

    def __post_init__(self):
        if not 0 < self.c < math.inf:
            raise InvalidInputError(
                f"Omori c-value must be positive, got {self.c}",
                [("c", "Omori c-value must be positive")],
            )
        for name in ("a", "b", "p"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidInputError(
                    f"Parameter '{name}' must be a finite number",
                    [(name, f"Parameter '{name}' must be a finite number")],
                )

    def as_dict(self) -> Dict[str, float]:
        return {"a": self.a, "b": self.b, "c": self.c, "p": self.p}


@dataclass(frozen=True)
class MagnitudeThresholds:
    """
    Three strictly decreasing magnitude thresholds.

    Band semantics:
    - M1: count at or above m1
    - M2: count in [m2, m1)
    - M3: count in [m3, m2)
    """
    m1: float
    m2: float
    m3: float

    def __post_init__(self):
        errors = []
        if not self.m2 < self.m1:
            errors.append(("magnitude_ranges", "M2 must be less than M1"))
        if not self.m3 < self.m2:
            errors.append(("magnitude_ranges", "M3 must be less than M2"))
        if errors:
            raise InvalidInputError.from_errors(errors)

    def label(self, band: Band) -> str:
        """Human-readable band label, e.g. 'M5+' or 'M4-M5'."""
        m1, m2, m3 = (format_magnitude(m) for m in (self.m1, self.m2, self.m3))
        if band is Band.M1:
            return f"M{m1}+"
        if band is Band.M2:
            return f"M{m2}-M{m1}"
        return f"M{m3}-M{m2}"

    @property
    def labels(self) -> Dict[Band, str]:
        return {band: self.label(band) for band in Band}


@dataclass(frozen=True)
class ForecastWindow:
    """A forecast window measured in days since the main shock."""
    range_start: float          # Days after the main shock, finite and >= 0
    duration: float             # Window length in days, finite and > 0

    def __post_init__(self):
        if not 0 < self.duration < math.inf:
            raise InvalidInputError(
                "Duration must be positive",
                [("duration", "Duration must be positive")],
            )
        if not 0 <= self.range_start < math.inf:
            raise InvalidInputError(
                "Forecast cannot start before the earthquake occurred",
                [("start_time", "Forecast cannot start before the earthquake occurred")],
            )

    @property
    def range_end(self) -> float:
        return self.range_start + self.duration


# =============================================================================
# DATA CLASSES - RESULTS
# =============================================================================

@dataclass(frozen=True)
class ForecastResult:
    """Forecast for a single magnitude band over one window."""
    expected_count: float       # Mean number of events (Poisson rate)
    lower_bound: int            # 2.5% Poisson quantile
    upper_bound: int            # 97.5% Poisson quantile
    probability_percent: float  # Chance of one or more events (0-100)


@dataclass(frozen=True)
class DurationForecast:
    """The three band forecasts for one forecast window."""
    duration: float
    m1: ForecastResult          # M1+ (largest events)
    m2: ForecastResult          # M2 to M1
    m3: ForecastResult          # M3 to M2 (smallest events)

    def band(self, band: Band) -> ForecastResult:
        return getattr(self, band.value)

    @property
    def results(self) -> Dict[Band, ForecastResult]:
        return {band: self.band(band) for band in Band}


# =============================================================================
# DATA CLASSES - REQUESTS
# =============================================================================

@dataclass(frozen=True)
class QuakeData:
    """Main shock details as supplied by an event catalog."""
    quake_id: str
    magnitude: float
    quake_time: datetime        # Origin time (timezone aware)


@dataclass(frozen=True)
class ForecastRequest:
    """
    Everything needed to forecast one aftershock sequence.

    Times are timezone-aware datetimes; the engine converts them to
    elapsed days since the main shock.

    Model parameters come either from a preset in the assembler's registry
    (preset_code, optionally adjusted by overrides) or from an explicit
    parameters value. With neither, the default preset is used.
    """
    magnitude: float
    quake_time: datetime
    start_time: datetime
    durations: Tuple[float, ...]
    thresholds: MagnitudeThresholds
    parameters: Optional[ModelParameters] = None
    quake_id: str = ""
    preset_code: Optional[str] = None
    overrides: Dict[str, float] = field(default_factory=dict)   # e.g. {"a": -1.8}


@dataclass(frozen=True)
class CalculationResults:
    """Forecasts for every requested window of one request."""
    quake_id: str
    range_labels: Dict[Band, str]
    forecasts: List[DurationForecast]
    parameters: ModelParameters
    range_start_days: float
    warnings: List[str] = field(default_factory=list)
    preset_code: Optional[str] = None   # Registry code, or "custom"
    model_name: str = ""


# =============================================================================
# ABSTRACT INTERFACES
# =============================================================================

class QuakeDataSource(ABC):
    """Interface for looking up main shock details by event id."""

    @abstractmethod
    def get_quake(self, quake_id: str) -> QuakeData:
        """Return the magnitude and origin time of an event."""
        pass

    @abstractmethod
    def list_quakes(self) -> List[str]:
        """Return the ids of the events this source knows about."""
        pass
