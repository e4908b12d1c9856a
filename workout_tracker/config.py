"""Central configuration for the workout tracker.

All values are constants imported by the rest of the package. Each can be
overridden through a ``WORKOUT_*`` environment variable (optionally via a
local `.env`); unparsable overrides fall back to the default.
"""

from __future__ import annotations

import os
from typing import Callable, TypeVar

from dotenv import load_dotenv

_T = TypeVar("_T", int, float)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def _env_number(key: str, default: _T, cast: Callable[[str], _T]) -> _T:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    return _env_number(key, default, float)


def _env_int(key: str, default: int) -> int:
    return _env_number(key, default, int)


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# Motion filtering
# ---------------------------------------------------------------------------
# Fixes reporting a horizontal accuracy worse than this (metres) are noted for
# display but never contribute to the route or distance.
MAX_ACCURACY_M = _env_float("WORKOUT_MAX_ACCURACY_M", 20.0)

# Minimum displacement (metres) between fixes that counts as movement. The
# same threshold, in km, de-duplicates route points.
MOVEMENT_THRESHOLD_M = _env_float("WORKOUT_MOVEMENT_THRESHOLD_M", 1.0)

# Speed band (m/s) accepted as genuine movement. Above the ceiling is a GPS
# spike (~29 km/h), below the floor is stationary jitter (~1 km/h).
MAX_SPEED_MPS = _env_float("WORKOUT_MAX_SPEED_MPS", 8.0)
MIN_SPEED_MPS = _env_float("WORKOUT_MIN_SPEED_MPS", 0.3)


# ---------------------------------------------------------------------------
# Session sampling
# ---------------------------------------------------------------------------
# Seconds between live snapshot refreshes while a workout is active.
SAMPLING_INTERVAL_S = _env_float("WORKOUT_SAMPLING_INTERVAL_S", 1.0)


# ---------------------------------------------------------------------------
# User profile
# ---------------------------------------------------------------------------
# JSON preference file holding the user's id, weight, height and age.
PROFILE_PATH = os.getenv("WORKOUT_PROFILE_PATH", "user_prefs.json")

DEFAULT_WEIGHT_KG = _env_float("WORKOUT_DEFAULT_WEIGHT_KG", 70.0)
DEFAULT_HEIGHT_CM = _env_float("WORKOUT_DEFAULT_HEIGHT_CM", 170.0)
DEFAULT_AGE_YEARS = _env_int("WORKOUT_DEFAULT_AGE_YEARS", 25)


# ---------------------------------------------------------------------------
# Session export
# ---------------------------------------------------------------------------
# Directory (absolute or relative) where finished sessions are written when
# the replay tool is not given an explicit output path.
EXPORT_DIR = os.getenv("WORKOUT_EXPORT_DIR", "sessions")

# Store the route as an encoded polyline string instead of a list of
# [lat, lon] pairs.
EXPORT_ENCODE_POLYLINE = _env_bool("WORKOUT_EXPORT_ENCODE_POLYLINE", True)

# Coordinate precision used for polyline encoding (5 = ~1 m).
EXPORT_POLYLINE_PRECISION = _env_int("WORKOUT_EXPORT_POLYLINE_PRECISION", 5)
