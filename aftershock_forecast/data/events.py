"""
Main shock event data.

An in-memory QuakeDataSource and helpers for turning catalog details
(magnitude, origin time) into forecast inputs.
"""

import logging
import math
from datetime import datetime, timezone
from types import MappingProxyType
from typing import List, Mapping, Optional

from aftershock_forecast.core import (
    MagnitudeThresholds,
    QuakeData,
    QuakeDataSource,
    QuakeNotFoundError,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

# 2016 M7.8 Kaikoura earthquake, a well-studied New Zealand sequence
DEMO_QUAKE = QuakeData(
    quake_id="2016p858000",
    magnitude=7.8,
    quake_time=datetime(2016, 11, 13, 11, 2, 56, tzinfo=timezone.utc),
)


# =============================================================================
# TIME HELPERS
# =============================================================================


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_time(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp such as '2016-11-13T11:02:56Z'.

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def elapsed_days(quake_time: datetime, start_time: datetime) -> float:
    """Days from the main shock to the forecast start (negative if before)."""
    delta = ensure_utc(start_time) - ensure_utc(quake_time)
    return delta.total_seconds() / SECONDS_PER_DAY


# =============================================================================
# MAGNITUDE THRESHOLDS
# =============================================================================


def initial_magnitude_thresholds(magnitude: float) -> MagnitudeThresholds:
    """
    Suggest band thresholds for a main shock.

    M1 is the main shock magnitude rounded down to a whole number (kept
    within 1-9); M2 and M3 step down by one, never below 1.

    Returns:
        MagnitudeThresholds, or raises InvalidInputError when clamping at 1
        collapses the bands (main shock below about M3)
    """
    m1 = max(1, min(9, math.floor(magnitude)))
    m2 = max(1, m1 - 1)
    m3 = max(1, m1 - 2)
    return MagnitudeThresholds(m1=float(m1), m2=float(m2), m3=float(m3))


# =============================================================================
# STATIC SOURCE
# =============================================================================


class StaticQuakeSource(QuakeDataSource):
    """
    QuakeDataSource backed by a fixed set of events.

    Defaults to the bundled demo event; pass a mapping of quake id to
    QuakeData to serve other events.
    """

    def __init__(self, events: Optional[Mapping[str, QuakeData]] = None):
        if events is None:
            events = {DEMO_QUAKE.quake_id: DEMO_QUAKE}
        self._events = MappingProxyType(dict(events))

    def get_quake(self, quake_id: str) -> QuakeData:
        key = quake_id.strip()
        if key not in self._events:
            available = ", ".join(self._events.keys()) or "none"
            raise QuakeNotFoundError(f"Quake '{key}' not found. Available: {available}")
        quake = self._events[key]
        logger.debug(f"Loaded {quake.quake_id}: M{quake.magnitude} at {quake.quake_time.isoformat()}")
        return quake

    def list_quakes(self) -> List[str]:
        return list(self._events.keys())
