"""Calorie and pace estimation from distance, duration and body weight.

Pure functions; the calorie model multiplies a speed-banded MET (metabolic
equivalent of task) by body weight and elapsed hours.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

_LOG = logging.getLogger(__name__)

_MS_PER_HOUR = 3_600_000.0
_MIN_DURATION_MS = 1000

# (inclusive upper speed bound in km/h, MET), checked in order.
MET_BANDS: Sequence[Tuple[float, float]] = (
    (4.0, 2.0),
    (8.0, 7.0),
    (11.0, 8.5),
)
MET_ABOVE_BANDS = 10.0


def met_for_speed(speed_kmh: float) -> float:
    """Return the MET for ``speed_kmh`` using the first matching band."""

    for upper, met in MET_BANDS:
        if speed_kmh <= upper:
            return met
    return MET_ABOVE_BANDS


def estimate_calories(weight_kg: float, distance_km: float, duration_ms: int) -> float:
    """Estimate kilocalories burned over ``duration_ms``.

    Samples shorter than one second return 0.
    """

    if duration_ms < _MIN_DURATION_MS:
        return 0.0
    hours = duration_ms / _MS_PER_HOUR
    if hours <= 0:
        return 0.0
    speed_kmh = distance_km / hours
    met = met_for_speed(speed_kmh)
    calories = met * weight_kg * hours
    _LOG.debug(
        "Calories calculated: %.1f (MET=%.1f, speed=%.2f km/h)",
        calories,
        met,
        speed_kmh,
    )
    return calories


def estimate_pace(distance_km: float, duration_ms: int) -> float:
    """Return the average speed in km/h, or 0 when either input is not positive."""

    if distance_km <= 0 or duration_ms <= 0:
        return 0.0
    return distance_km / (duration_ms / _MS_PER_HOUR)


__all__ = ["MET_BANDS", "estimate_calories", "estimate_pace", "met_for_speed"]
