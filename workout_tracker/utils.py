"""Presentation and serialisation helpers shared across modules."""

from __future__ import annotations

import json
from typing import Any


def format_duration(duration_ms: int) -> str:
    """Format milliseconds as ``HH:MM:SS``."""

    total_seconds = max(0, int(duration_ms)) // 1000
    hours, rem = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_distance(distance_km: float) -> str:
    return f"{distance_km:.2f} km"


def format_calories(calories_kcal: float) -> str:
    return f"{calories_kcal:.0f} kcal"


def format_pace(pace_kmh: float) -> str:
    return f"{pace_kmh:.2f} km/h"


def _normalise_value(value: Any) -> Any:
    """Convert containers to JSON-friendly representations with string keys."""

    if isinstance(value, (list, tuple)):
        return [_normalise_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _normalise_value(val) for key, val in value.items()}
    return value


def json_dumps_sorted(value: Any, *, indent: int | None = None) -> str:
    """Return canonical JSON (sorted keys) for plain values."""

    normalised = _normalise_value(value)
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(normalised, sort_keys=True, separators=separators, indent=indent)


__all__ = [
    "format_calories",
    "format_distance",
    "format_duration",
    "format_pace",
    "json_dumps_sorted",
]
