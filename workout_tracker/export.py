"""Serialise finished workout sessions for the persistence layer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import polyline

from .config import EXPORT_DIR, EXPORT_ENCODE_POLYLINE, EXPORT_POLYLINE_PRECISION
from .models import GeoPoint, Route, WorkoutSession
from .utils import json_dumps_sorted

_LOG = logging.getLogger(__name__)


def encode_route(route: Route, precision: int = EXPORT_POLYLINE_PRECISION) -> str:
    """Encode route points as a Google polyline string."""

    if not route:
        return ""
    return polyline.encode(
        [(point.latitude, point.longitude) for point in route], precision
    )


def decode_route(encoded: str, precision: int = EXPORT_POLYLINE_PRECISION) -> Route:
    if not encoded:
        return ()
    try:
        decoded = polyline.decode(encoded, precision)
    except (ValueError, TypeError, IndexError) as exc:
        raise ValueError("Unable to decode route polyline") from exc
    return tuple(GeoPoint(float(lat), float(lon)) for lat, lon in decoded)


def session_to_dict(
    session: WorkoutSession, *, encode_polyline: bool = EXPORT_ENCODE_POLYLINE
) -> Dict[str, Any]:
    route: str | List[List[float]]
    if encode_polyline:
        route = encode_route(session.route)
    else:
        route = [[p.latitude, p.longitude] for p in session.route]
    return {
        "id": session.id,
        "distance_km": session.distance_km,
        "duration_ms": session.duration_ms,
        "calories_kcal": session.calories_kcal,
        "average_pace_kmh": session.average_pace_kmh,
        "timestamp_ms": session.timestamp_ms,
        "route_points": len(session.route),
        "route": route,
    }


def default_session_path(session: WorkoutSession) -> Path:
    return Path(EXPORT_DIR) / f"workout-{session.timestamp_ms}-{session.id[:8]}.json"


def write_session_json(
    session: WorkoutSession,
    path: str | Path | None = None,
    *,
    encode_polyline: bool = EXPORT_ENCODE_POLYLINE,
) -> Path:
    """Write ``session`` as JSON and return the path written."""

    target = Path(path) if path is not None else default_session_path(session)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = session_to_dict(session, encode_polyline=encode_polyline)
    target.write_text(json_dumps_sorted(payload, indent=2), encoding="utf-8")
    _LOG.info("Session %s written to %s", session.id, target)
    return target


__all__ = [
    "decode_route",
    "default_session_path",
    "encode_route",
    "session_to_dict",
    "write_session_json",
]
