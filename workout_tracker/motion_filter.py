"""Classify raw fixes as movement or noise and accumulate route + distance.

Every fix passes two independent gates before it changes the aggregates:

1. Classification against the last valid fix: displacement above the
   movement threshold and a plausible speed (neither a GPS spike nor
   stationary jitter).
2. Route de-duplication against the last *route* point, so that many small
   valid movements do not produce an over-dense polyline.

Distance only grows when a point is appended to the route.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import List, Optional

from .config import (
    MAX_ACCURACY_M,
    MAX_SPEED_MPS,
    MIN_SPEED_MPS,
    MOVEMENT_THRESHOLD_M,
)
from .geo import haversine_km, haversine_m
from .models import GeoPoint, MotionDecision, RawFix, RejectionReason, Route

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class MotionFilterConfig:
    max_accuracy_m: float = MAX_ACCURACY_M
    movement_threshold_m: float = MOVEMENT_THRESHOLD_M
    max_speed_mps: float = MAX_SPEED_MPS
    min_speed_mps: float = MIN_SPEED_MPS


@dataclass(frozen=True, slots=True)
class MotionAggregate:
    """Consistent copy of the filter's public state."""

    route: Route
    distance_km: float
    is_moving: bool
    current_position: Optional[GeoPoint]


class MotionFilter:
    """Turn a noisy fix stream into a monotone route and distance total.

    ``ingest`` and ``aggregate`` hold the same lock, so a reader never sees a
    distance that does not match the route.
    """

    def __init__(self, config: MotionFilterConfig | None = None) -> None:
        self.config = config or MotionFilterConfig()
        self._lock = threading.Lock()
        self._route: List[GeoPoint] = []
        self._distance_km = 0.0
        self._last_valid_fix: RawFix | None = None
        self._last_update_ms = 0
        self._is_moving = False
        self._current_position: GeoPoint | None = None

    @property
    def last_valid_fix(self) -> RawFix | None:
        return self._last_valid_fix

    @property
    def is_moving(self) -> bool:
        return self._is_moving

    @property
    def distance_km(self) -> float:
        return self._distance_km

    def ingest(self, fix: RawFix) -> MotionDecision:
        """Classify ``fix`` and update the route and distance accordingly."""

        with self._lock:
            return self._ingest_locked(fix)

    def aggregate(self) -> MotionAggregate:
        with self._lock:
            return MotionAggregate(
                route=tuple(self._route),
                distance_km=self._distance_km,
                is_moving=self._is_moving,
                current_position=self._current_position,
            )

    def reset(self) -> None:
        """Forget the route, distance and motion state."""

        with self._lock:
            self._route.clear()
            self._distance_km = 0.0
            self._last_valid_fix = None
            self._last_update_ms = 0
            self._is_moving = False
            self._current_position = None

    def _ingest_locked(self, fix: RawFix) -> MotionDecision:
        cfg = self.config
        self._current_position = fix.point

        if fix.accuracy_m > cfg.max_accuracy_m:
            self._is_moving = False
            self._last_update_ms = fix.timestamp_ms
            _LOG.debug("Location accuracy too poor: %.1f m", fix.accuracy_m)
            return MotionDecision(
                accepted=False, reason=RejectionReason.POOR_ACCURACY
            )

        last = self._last_valid_fix
        if last is None:
            self._last_valid_fix = fix
            self._last_update_ms = fix.timestamp_ms
            self._is_moving = False
            _, added = self._append_route_point(fix.point)
            return MotionDecision(accepted=True, first_fix=True, route_point_added=added)

        distance_m = haversine_m(last.point, fix.point)
        gap_ms = fix.timestamp_ms - self._last_update_ms
        clock_anomaly = gap_ms <= 0
        speed_mps = 0.0 if clock_anomaly else distance_m * 1000.0 / gap_ms
        if clock_anomaly:
            _LOG.debug("Non-positive time gap %s ms; treating speed as zero", gap_ms)

        self._is_moving = (
            distance_m > cfg.movement_threshold_m
            and cfg.min_speed_mps < speed_mps < cfg.max_speed_mps
        )
        self._last_valid_fix = fix
        self._last_update_ms = fix.timestamp_ms

        if not self._is_moving:
            _LOG.debug(
                "No valid movement: distance=%.2f m speed=%.2f m/s",
                distance_m,
                speed_mps,
            )
            return MotionDecision(
                accepted=False,
                reason=RejectionReason.NO_MOVEMENT,
                clock_anomaly=clock_anomaly,
            )

        delta_km, added = self._append_route_point(fix.point)
        _LOG.debug(
            "Valid movement: distance=%.2f m speed=%.2f m/s", distance_m, speed_mps
        )
        return MotionDecision(
            accepted=True,
            distance_delta_km=delta_km,
            is_moving=True,
            route_point_added=added,
        )

    def _append_route_point(self, point: GeoPoint) -> tuple[float, bool]:
        # The first point has nothing to measure against and adds no distance.
        if not self._route:
            self._route.append(point)
            _LOG.debug("Added first route point")
            return 0.0, True
        delta_km = haversine_km(self._route[-1], point)
        if delta_km <= self.config.movement_threshold_m / 1000.0:
            return 0.0, False
        self._route.append(point)
        self._distance_km += delta_km
        _LOG.debug(
            "Added point to route: %.4f km, total %.4f km", delta_km, self._distance_km
        )
        return delta_km, True


__all__ = ["MotionAggregate", "MotionFilter", "MotionFilterConfig"]
