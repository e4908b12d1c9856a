"""Great-circle distance helpers."""

from __future__ import annotations

import math

from .models import GeoPoint

_EARTH_RADIUS_M = 6_371_000.0


def haversine_m(first: GeoPoint, second: GeoPoint) -> float:
    """Return the haversine distance in metres between two points."""

    sin = math.sin
    cos = math.cos
    radians = math.radians
    lat1_rad = radians(first.latitude)
    lat2_rad = radians(second.latitude)
    delta_lat = lat2_rad - lat1_rad
    delta_lon = radians(second.longitude - first.longitude)
    sin_half_lat = sin(delta_lat / 2.0)
    sin_half_lon = sin(delta_lon / 2.0)
    a = sin_half_lat**2 + cos(lat1_rad) * cos(lat2_rad) * sin_half_lon**2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return _EARTH_RADIUS_M * c


def haversine_km(first: GeoPoint, second: GeoPoint) -> float:
    return haversine_m(first, second) / 1000.0


__all__ = ["haversine_m", "haversine_km"]
