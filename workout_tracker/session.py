"""Workout session lifecycle and live snapshot publication.

``SessionController`` owns the idle/active/paused state machine, the active
duration bookkeeping and a periodic sampler that turns the motion filter's
aggregates into ``WorkoutSnapshot`` values for listeners. One controller
tracks one workout; ``clear`` (or a new instance) starts the next.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
import uuid
from typing import Callable, List, Optional

from .clock import Clock, system_now_ms
from .config import SAMPLING_INTERVAL_S
from .energy import estimate_calories, estimate_pace
from .errors import InvalidStateTransition
from .models import (
    MotionDecision,
    RawFix,
    SessionState,
    UserProfile,
    WorkoutSession,
    WorkoutSnapshot,
)
from .motion_filter import MotionFilter
from .profile import default_profile
from .sampling import SamplingLoop
from .sources import FixSource

SnapshotListener = Callable[[WorkoutSnapshot], None]
SessionSink = Callable[[WorkoutSession], None]


@dataclass(slots=True)
class SessionControllerConfig:
    clock: Clock = system_now_ms
    uuid_factory: Callable[[], uuid.UUID] = uuid.uuid4
    sampling_interval_s: float = SAMPLING_INTERVAL_S
    # When False no background sampler runs; drivers call ``sample()``.
    auto_sample: bool = True
    session_sink: SessionSink | None = None
    logger: logging.Logger | None = None


class SessionController:
    def __init__(
        self,
        profile: UserProfile | None = None,
        *,
        source: FixSource | None = None,
        motion_filter: MotionFilter | None = None,
        config: SessionControllerConfig | None = None,
    ) -> None:
        self.config = config or SessionControllerConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)
        self._clock = self.config.clock
        self._profile = profile or default_profile()
        self._source = source
        self._filter = motion_filter or MotionFilter()
        self._lock = threading.RLock()
        self._listeners: List[SnapshotListener] = []
        self._listeners_lock = threading.Lock()
        # Publication order: ``_seq`` is bumped under ``_lock``; the rest is
        # guarded by ``_listeners_lock``.
        self._seq = 0
        self._queued_seq = 0
        self._pending: WorkoutSnapshot | None = None
        self._dispatching = False
        self._state = SessionState.IDLE
        self._tracking_start_ms = 0
        self._accumulated_ms = 0
        self._finalized = False
        self._sampler: SamplingLoop | None = None
        if self.config.auto_sample:
            self._sampler = SamplingLoop(self.sample, self.config.sampling_interval_s)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def is_tracking(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def motion_filter(self) -> MotionFilter:
        return self._filter

    @property
    def profile(self) -> UserProfile:
        with self._lock:
            return self._profile

    @profile.setter
    def profile(self, value: UserProfile) -> None:
        with self._lock:
            self._profile = value

    def current_duration_ms(self) -> int:
        """Active time so far; frozen while paused or idle."""

        with self._lock:
            return self._current_duration_locked()

    def snapshot(self) -> WorkoutSnapshot:
        with self._lock:
            return self._snapshot_locked()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def subscribe(self, listener: SnapshotListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Lifecycle commands
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Begin a fresh workout from IDLE, or continue a paused one."""

        return self._command("start", self._start_locked)

    def resume(self) -> bool:
        return self._command("resume", self._resume_locked)

    def stop(self) -> bool:
        """Pause tracking; route, distance and duration are kept."""

        return self._command("stop", self._stop_locked)

    def clear(self) -> bool:
        return self._command("clear", self._clear_locked)

    def finalize(self) -> Optional[WorkoutSession]:
        """Materialize the paused workout as a ``WorkoutSession``.

        Returns None when the controller is not paused or the session was
        already finalized. The record is passed to ``session_sink`` when one
        is configured.
        """

        with self._lock:
            try:
                session = self._finalize_locked()
            except InvalidStateTransition as exc:
                self._log.info("Ignoring finalize: %s", exc)
                return None
            snapshot = self._snapshot_locked()
            seq = self._next_seq_locked()
        self._publish(snapshot, seq)
        sink = self.config.session_sink
        if sink is not None:
            try:
                sink(session)
            except Exception:
                self._log.error(
                    "Session sink failed for session=%s", session.id, exc_info=True
                )
        return session

    def finish(self) -> Optional[WorkoutSession]:
        """End the workout: stop if still active, then finalize."""

        if self.state is SessionState.ACTIVE:
            self.stop()
        return self.finalize()

    def close(self) -> None:
        """Tear down: stop tracking and wait for the sampler to exit."""

        with self._lock:
            if self._state is SessionState.ACTIVE:
                self._stop_locked()
            sampler = self._sampler
        if sampler is not None:
            sampler.cancel(timeout=max(1.0, self.config.sampling_interval_s))

    def __enter__(self) -> "SessionController":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Fix ingestion and sampling
    # ------------------------------------------------------------------
    def on_fix(self, fix: RawFix) -> Optional[MotionDecision]:
        """Feed a fix to the motion filter; ignored unless ACTIVE."""

        with self._lock:
            if self._state is not SessionState.ACTIVE:
                self._log.debug("Dropping fix received while %s", self._state.value)
                return None
            return self._filter.ingest(fix)

    def sample(self) -> Optional[WorkoutSnapshot]:
        """Recompute and publish one snapshot; a no-op unless ACTIVE."""

        with self._lock:
            if self._state is not SessionState.ACTIVE:
                return None
            snapshot = self._snapshot_locked()
            seq = self._next_seq_locked()
        self._publish(snapshot, seq)
        return snapshot

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _command(self, name: str, action: Callable[[], None]) -> bool:
        with self._lock:
            try:
                action()
            except InvalidStateTransition as exc:
                self._log.info("Ignoring %s: %s", name, exc)
                return False
            snapshot = self._snapshot_locked()
            seq = self._next_seq_locked()
        self._publish(snapshot, seq)
        return True

    def _start_locked(self) -> None:
        if self._state is SessionState.ACTIVE:
            raise InvalidStateTransition("workout already active")
        if self._state is SessionState.PAUSED:
            self._resume_locked()
            return
        self._filter.reset()
        self._accumulated_ms = 0
        self._finalized = False
        self._begin_tracking_locked()
        self._log.info("Workout started")

    def _resume_locked(self) -> None:
        if self._state is not SessionState.PAUSED:
            raise InvalidStateTransition(
                f"cannot resume from {self._state.value}"
            )
        if self._finalized:
            raise InvalidStateTransition("session already finalized; clear first")
        self._begin_tracking_locked()
        self._log.info("Workout resumed at %d ms active", self._accumulated_ms)

    def _begin_tracking_locked(self) -> None:
        self._tracking_start_ms = self._clock()
        self._state = SessionState.ACTIVE
        if self._source is not None:
            self._source.subscribe(self.on_fix)
        if self._sampler is not None:
            self._sampler.start()

    def _stop_locked(self) -> None:
        if self._state is SessionState.IDLE:
            raise InvalidStateTransition("no workout in progress")
        if self._state is SessionState.PAUSED:
            return
        self._accumulated_ms += max(0, self._clock() - self._tracking_start_ms)
        self._tracking_start_ms = 0
        self._state = SessionState.PAUSED
        self._end_tracking_locked()
        self._log.info("Workout paused after %d ms active", self._accumulated_ms)

    def _clear_locked(self) -> None:
        self._end_tracking_locked()
        self._filter.reset()
        self._accumulated_ms = 0
        self._tracking_start_ms = 0
        self._finalized = False
        self._state = SessionState.IDLE
        self._log.info("Workout cleared")

    def _end_tracking_locked(self) -> None:
        if self._source is not None:
            self._source.unsubscribe()
        if self._sampler is not None:
            self._sampler.cancel()

    def _finalize_locked(self) -> WorkoutSession:
        if self._state is not SessionState.PAUSED:
            raise InvalidStateTransition(
                f"cannot finalize from {self._state.value}; stop first"
            )
        if self._finalized:
            raise InvalidStateTransition("session already finalized")
        snap = self._snapshot_locked()
        session = WorkoutSession(
            id=str(self.config.uuid_factory()),
            distance_km=snap.distance_km,
            duration_ms=snap.duration_ms,
            calories_kcal=snap.calories_kcal,
            route=snap.route,
            average_pace_kmh=snap.pace_kmh,
            timestamp_ms=self._clock(),
        )
        self._finalized = True
        self._log.info(
            "Finalized session %s: %.2f km in %d ms",
            session.id,
            session.distance_km,
            session.duration_ms,
        )
        return session

    def _current_duration_locked(self) -> int:
        if self._state is SessionState.ACTIVE:
            return self._accumulated_ms + max(0, self._clock() - self._tracking_start_ms)
        return self._accumulated_ms

    def _snapshot_locked(self) -> WorkoutSnapshot:
        agg = self._filter.aggregate()
        duration_ms = self._current_duration_locked()
        return WorkoutSnapshot(
            distance_km=agg.distance_km,
            duration_ms=duration_ms,
            calories_kcal=estimate_calories(
                self._profile.weight_kg, agg.distance_km, duration_ms
            ),
            pace_kmh=estimate_pace(agg.distance_km, duration_ms),
            route=agg.route,
            is_tracking=self._state is SessionState.ACTIVE,
            state=self._state,
            current_position=agg.current_position,
        )

    def _next_seq_locked(self) -> int:
        self._seq += 1
        return self._seq

    def _publish(self, snapshot: WorkoutSnapshot, seq: int) -> None:
        """Deliver ``snapshot`` unless a newer one has already been queued.

        One thread dispatches at a time. Callers that arrive while a dispatch
        is running leave their snapshot as pending and return; the dispatcher
        switches to the newest pending snapshot before each listener call, so
        listeners never see an older snapshot after a newer one.
        """

        with self._listeners_lock:
            if seq <= self._queued_seq:
                self._log.debug("Dropping superseded snapshot seq=%d", seq)
                return
            self._queued_seq = seq
            self._pending = snapshot
            if self._dispatching:
                return
            self._dispatching = True
        drained = False
        try:
            drained = self._dispatch_pending()
        finally:
            if not drained:
                with self._listeners_lock:
                    self._dispatching = False
                    self._pending = None

    def _dispatch_pending(self) -> bool:
        while True:
            with self._listeners_lock:
                current = self._pending
                if current is None:
                    # Cleared under the same lock a publisher checks it with.
                    self._dispatching = False
                    return True
                self._pending = None
                listeners = list(self._listeners)
            for listener in listeners:
                with self._listeners_lock:
                    if self._pending is not None:
                        break
                try:
                    listener(current)
                except Exception:
                    self._log.error("Snapshot listener failed", exc_info=True)


__all__ = ["SessionController", "SessionControllerConfig", "SnapshotListener"]
