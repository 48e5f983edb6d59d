"""Timers and clocks for debounced behaviors.

Every suspension point in the automation layer is a single-pending debounce
timer. Cancelling a handle guarantees its callback never runs.
"""

import asyncio
import heapq
import itertools
import time
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """A pending timer."""

    def cancel(self) -> None:
        """Cancel the timer; its callback will not run."""


class Scheduler(Protocol):
    """Source of timers and of the current time."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` after ``delay_ms`` milliseconds."""

    def now_ms(self) -> float:
        """Current time in milliseconds."""


class _ManualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock; timers fire only when the clock is advanced."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._queue: list[tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle()
        heapq.heappush(self._queue, (self._now + delay_ms, next(self._counter), handle, callback))
        return handle

    def now_ms(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, firing due timers in order.

        Returns:
            Number of callbacks that ran
        """
        target = self._now + delta_ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            callback()
            fired += 1
        self._now = target
        return fired

    @property
    def pending(self) -> int:
        """Number of timers that have not fired or been cancelled."""
        return sum(1 for entry in self._queue if not entry[2].cancelled)


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(delay_ms / 1000.0, callback)

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class Debouncer:
    """Holds at most one pending timer; scheduling again restarts it."""

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """Whether a timer is armed."""
        return self._handle is not None

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> None:
        """Cancel any pending timer and arm a new one."""
        self.cancel()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = self._scheduler.call_later(delay_ms, fire)

    def cancel(self) -> None:
        """Cancel the pending timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
