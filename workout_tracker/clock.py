"""Wall-clock sources in epoch milliseconds."""

from __future__ import annotations

import threading
import time
from typing import Callable

Clock = Callable[[], int]


def system_now_ms() -> int:
    return int(time.time() * 1000)


class ManualClock:
    """Clock whose time only moves when told to (replay and tests)."""

    def __init__(self, start_ms: int = 0) -> None:
        self._lock = threading.Lock()
        self._now_ms = int(start_ms)

    def __call__(self) -> int:
        with self._lock:
            return self._now_ms

    def set(self, now_ms: int) -> None:
        with self._lock:
            self._now_ms = int(now_ms)

    def advance(self, delta_ms: int) -> int:
        with self._lock:
            self._now_ms += int(delta_ms)
            return self._now_ms


__all__ = ["Clock", "ManualClock", "system_now_ms"]
