"""Timing tests for the background sampler; intervals are kept tiny."""

import threading
import time

import pytest

from workout_tracker.models import SessionState, UserProfile, WorkoutSnapshot
from workout_tracker.sampling import SamplingLoop
from workout_tracker.session import SessionController, SessionControllerConfig


def test_loop_ticks_until_cancelled() -> None:
    ticks = []
    reached = threading.Event()

    def tick() -> None:
        ticks.append(time.monotonic())
        if len(ticks) >= 3:
            reached.set()

    loop = SamplingLoop(tick, interval_s=0.01)
    loop.start()
    assert reached.wait(2.0), "Sampler did not tick in time"
    loop.cancel(timeout=1.0)
    assert not loop.running

    settled = len(ticks)
    time.sleep(0.05)
    assert len(ticks) == settled


def test_cancel_wakes_long_interval_promptly() -> None:
    loop = SamplingLoop(lambda: None, interval_s=30.0)
    loop.start()
    started = time.monotonic()
    loop.cancel(timeout=2.0)
    assert time.monotonic() - started < 2.0
    assert not loop.running


def test_loop_can_restart_after_cancel() -> None:
    hits = threading.Event()
    loop = SamplingLoop(hits.set, interval_s=0.01)
    loop.start()
    loop.cancel(timeout=1.0)
    hits.clear()
    loop.start()
    assert hits.wait(2.0)
    loop.cancel(timeout=1.0)


def test_invalid_interval_rejected() -> None:
    with pytest.raises(ValueError):
        SamplingLoop(lambda: None, interval_s=0)


def test_controller_publishes_ticks_while_active() -> None:
    snapshots: list[WorkoutSnapshot] = []
    ticked = threading.Event()

    def listener(snapshot: WorkoutSnapshot) -> None:
        snapshots.append(snapshot)
        if len(snapshots) >= 3:
            ticked.set()

    controller = SessionController(
        UserProfile(id="u"),
        config=SessionControllerConfig(sampling_interval_s=0.01),
    )
    controller.subscribe(listener)
    with controller:
        controller.start()
        assert ticked.wait(2.0), "No periodic snapshots while active"
        controller.stop()
        time.sleep(0.05)
        settled = len(snapshots)
        time.sleep(0.05)
        assert len(snapshots) == settled
        assert not snapshots[-1].is_tracking


def test_tick_blocked_in_a_listener_cannot_overwrite_stop() -> None:
    entered = threading.Event()
    release = threading.Event()
    blocked_once: list[bool] = []
    seen: list[WorkoutSnapshot] = []

    def slow_listener(snapshot: WorkoutSnapshot) -> None:
        if threading.current_thread() is threading.main_thread() or blocked_once:
            return
        blocked_once.append(True)
        entered.set()
        release.wait(2.0)

    controller = SessionController(
        UserProfile(id="u"),
        config=SessionControllerConfig(sampling_interval_s=0.01),
    )
    controller.subscribe(slow_listener)
    controller.subscribe(seen.append)
    with controller:
        controller.start()
        assert entered.wait(2.0), "Sampler never delivered a tick"
        assert controller.stop() is True
        release.set()
    # close() joined the sampler, so its dispatch has finished.
    states = [snapshot.state for snapshot in seen]
    assert states[0] is SessionState.ACTIVE
    assert states.index(SessionState.PAUSED) == len(states) - 1
    assert not seen[-1].is_tracking
