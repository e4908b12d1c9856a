"""Global pytest fixtures & helpers.

Adds project root to path and provides fix builders shared by the motion
filter, session and replay tests.
"""
from __future__ import annotations

import math
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from workout_tracker.clock import ManualClock
from workout_tracker.models import RawFix, UserProfile

ORIGIN_LAT = 51.4800
ORIGIN_LON = -3.1800
_EARTH_RADIUS_M = 6_371_000.0


# --- Factory helpers -------------------------------------------------
def north_of(lat: float, metres: float) -> float:
    """Latitude ``metres`` due north of ``lat`` (haversine-exact)."""
    return lat + math.degrees(metres / _EARTH_RADIUS_M)


def make_fix(
    metres_north: float = 0.0,
    timestamp_ms: int = 0,
    accuracy_m: float = 5.0,
) -> RawFix:
    return RawFix(
        latitude=north_of(ORIGIN_LAT, metres_north),
        longitude=ORIGIN_LON,
        accuracy_m=accuracy_m,
        timestamp_ms=timestamp_ms,
    )


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def clock():
    return ManualClock(1_700_000_000_000)


@pytest.fixture
def profile():
    return UserProfile(id="user-1", weight_kg=70.0, height_cm=170.0, age_years=25)
