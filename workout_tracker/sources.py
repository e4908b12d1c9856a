"""Location-fix sources the session controller can subscribe to."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from .models import RawFix

FixCallback = Callable[[RawFix], None]

_LOG = logging.getLogger(__name__)


class FixSource(Protocol):
    """Anything that pushes fixes to a single registered callback."""

    def subscribe(self, callback: FixCallback) -> None: ...

    def unsubscribe(self) -> None: ...


class ReplayFixSource:
    """Deliver previously recorded fixes to the current subscriber.

    Fixes delivered while nobody is subscribed are dropped, mirroring a
    provider whose updates were not requested.
    """

    def __init__(self, fixes: Iterable[RawFix] = ()) -> None:
        self._lock = threading.Lock()
        self._callback: Optional[FixCallback] = None
        self._fixes: List[RawFix] = list(fixes)

    @property
    def subscribed(self) -> bool:
        with self._lock:
            return self._callback is not None

    @property
    def fixes(self) -> Sequence[RawFix]:
        return tuple(self._fixes)

    def subscribe(self, callback: FixCallback) -> None:
        with self._lock:
            self._callback = callback
        _LOG.debug("Fix updates requested")

    def unsubscribe(self) -> None:
        with self._lock:
            self._callback = None
        _LOG.debug("Fix updates removed")

    def deliver(self, fix: RawFix) -> bool:
        """Push one fix; return False when there was no subscriber."""

        with self._lock:
            callback = self._callback
        if callback is None:
            return False
        callback(fix)
        return True

    def replay(
        self,
        before_each: Callable[[RawFix], None] | None = None,
        after_each: Callable[[RawFix], None] | None = None,
    ) -> int:
        """Deliver every stored fix in order and return how many were taken.

        ``before_each`` runs ahead of each delivery (e.g. to move a replay
        clock) and ``after_each`` once the subscriber has handled the fix.
        """

        delivered = 0
        for fix in self._fixes:
            if before_each is not None:
                before_each(fix)
            if self.deliver(fix):
                delivered += 1
            if after_each is not None:
                after_each(fix)
        return delivered


__all__ = ["FixCallback", "FixSource", "ReplayFixSource"]
