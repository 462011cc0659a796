"""Debounced callbacks over a pluggable scheduler.

A scheduler is anything exposing ``call_later(delay_seconds, callback)`` and
returning a handle with ``cancel()``. A running ``asyncio`` event loop fits
that shape; ``ManualScheduler`` is a virtual clock for synchronous hosts and
for tests.
"""

import heapq
import itertools
from typing import Callable


class _Handle:
    """Cancelable entry on the ManualScheduler queue."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler whose clock only moves when told to."""

    def __init__(self):
        self._now = 0.0
        self._queue: list = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Handle:
        handle = _Handle(self._now + max(delay, 0.0), callback)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not fired or been cancelled."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in order. Returns how many fired."""
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = when
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def run_all(self) -> int:
        """Fire everything still queued, including callbacks scheduled while running."""
        fired = 0
        while self._queue:
            when = self._queue[0][0]
            fired += self.advance(max(when - self._now, 0.0))
        return fired


class Debouncer:
    """Run ``callback`` once after ``delay_ms`` of quiet.

    Every ``trigger()`` cancels the pending timer and starts a new one, so only
    the most recent timer instance ever fires.
    """

    def __init__(self, delay_ms: int, callback: Callable[[], None], scheduler):
        self.delay_ms = delay_ms
        self._callback = callback
        self._scheduler = scheduler
        self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        self._handle = self._scheduler.call_later(self.delay_ms / 1000, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> bool:
        """Fire a pending callback now. Returns False if nothing was pending."""
        if self._handle is None:
            return False
        self.cancel()
        self._callback()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._callback()
