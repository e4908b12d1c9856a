"""Cancellable fixed-interval repeating task."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .config import SAMPLING_INTERVAL_S

__all__ = ["SamplingLoop"]

_LOG = logging.getLogger(__name__)


class SamplingLoop:
    """Run ``tick`` on a daemon thread every ``interval_s`` seconds.

    Cancellation is checked between ticks; ``cancel`` wakes a sleeping loop
    immediately, so no tick runs after it returns unless one was already in
    progress.
    """

    def __init__(
        self,
        tick: Callable[[], None],
        interval_s: float = SAMPLING_INTERVAL_S,
        *,
        name: str = "workout-sampler",
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be greater than zero")
        self._tick = tick
        self._interval_s = interval_s
        self._name = name
        self._lock = threading.Lock()
        self._stop_evt = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_evt = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._stop_evt,), name=self._name, daemon=True
            )
            self._thread.start()
        _LOG.debug("Sampling loop started (interval=%ss)", self._interval_s)

    def cancel(self, timeout: float | None = None) -> None:
        """Signal the loop to stop and optionally wait for the thread to exit."""

        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_evt.set()
        if thread is None:
            return
        if timeout is not None and thread is not threading.current_thread():
            thread.join(timeout)
        _LOG.debug("Sampling loop cancelled")

    def _run(self, stop_evt: threading.Event) -> None:
        while not stop_evt.wait(self._interval_s):
            try:
                self._tick()
            except Exception:  # pragma: no cover
                _LOG.exception("Sampling tick failed")
