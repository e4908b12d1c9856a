"""Dataclasses describing fixes, filter decisions and workout records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class RawFix:
    """One geolocation reading as delivered by the location provider."""

    latitude: float
    longitude: float
    accuracy_m: float
    timestamp_ms: int

    @property
    def point(self) -> "GeoPoint":
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float


Route = Tuple[GeoPoint, ...]


class RejectionReason(str, Enum):
    """Why a fix did not count as movement."""

    POOR_ACCURACY = "poor_accuracy"
    NO_MOVEMENT = "no_movement"


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    PAUSED = "paused"


@dataclass(frozen=True, slots=True)
class MotionDecision:
    """Outcome of feeding a single fix through the motion filter.

    Attributes:
        accepted: True for the bootstrap fix and for genuine movement.
        reason: Populated when ``accepted`` is False.
        first_fix: True when the fix bootstrapped the filter.
        distance_delta_km: Distance added to the running total (0 if none).
        is_moving: Movement flag after this fix.
        route_point_added: True when the fix position was appended to the route.
        clock_anomaly: True when the time gap to the previous fix was not
            positive and the speed was therefore treated as zero.
    """

    accepted: bool
    reason: Optional[RejectionReason] = None
    first_fix: bool = False
    distance_delta_km: float = 0.0
    is_moving: bool = False
    route_point_added: bool = False
    clock_anomaly: bool = False


@dataclass(frozen=True, slots=True)
class WorkoutSnapshot:
    """Read-only view of the live tracking aggregates."""

    distance_km: float
    duration_ms: int
    calories_kcal: float
    pace_kmh: float
    route: Route
    is_tracking: bool
    state: SessionState = SessionState.IDLE
    current_position: Optional[GeoPoint] = None


@dataclass(frozen=True, slots=True)
class WorkoutSession:
    """Finalized record of a finished workout."""

    id: str
    distance_km: float
    duration_ms: int
    calories_kcal: float
    route: Route
    average_pace_kmh: float
    timestamp_ms: int


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: str
    weight_kg: float = 70.0
    height_cm: float = 170.0
    age_years: int = 25
