"""Main shock event data and time helpers."""

from aftershock_forecast.data.events import (
    DEMO_QUAKE,
    StaticQuakeSource,
    elapsed_days,
    ensure_utc,
    initial_magnitude_thresholds,
    parse_time,
)

__all__ = [
    "DEMO_QUAKE",
    "StaticQuakeSource",
    "elapsed_days",
    "ensure_utc",
    "initial_magnitude_thresholds",
    "parse_time",
]
