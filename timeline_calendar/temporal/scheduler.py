"""
Injectable Timer Scheduler
==========================

All hover timers go through a Scheduler so that the popup state machine
can run on a live event loop or on virtual time.

MODES:
======
1. AsyncioScheduler: delegates to the running loop's call_later
2. ManualScheduler: virtual clock advanced explicitly (deterministic)

GUARANTEES:
===========
- Every handle supports cancel(); cancelling twice is harmless
- ManualScheduler fires callbacks in (due time, scheduling order)
- A cancelled handle never fires
"""

from __future__ import annotations
import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        raise NotImplementedError

    @property
    def cancelled(self) -> bool:
        raise NotImplementedError


class Scheduler:
    """
    Abstract timer source.

    Implementations decide what "later" means; callers only rely on the
    callback running once, on the same thread, unless cancelled first.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


# =============================================================================
# LIVE MODE
# =============================================================================

class _AsyncioHandle(TimerHandle):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Schedules on an asyncio loop (the running loop unless one is given)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioHandle(loop.call_later(delay, callback))


# =============================================================================
# VIRTUAL TIME
# =============================================================================

@dataclass
class _ManualHandle(TimerHandle):
    due: float
    order: int
    callback: Callable[[], None]
    _cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass
class ManualScheduler(Scheduler):
    """
    Virtual-time scheduler.

    Time only moves through advance(). Callbacks scheduled while firing
    are honoured within the same advance() if they fall due in it.
    """
    now: float = 0.0
    _queue: List[Tuple[float, int, _ManualHandle]] = field(default_factory=list)
    _counter: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ManualHandle(
            due=self.now + max(0.0, delay),
            order=next(self._counter),
            callback=callback,
        )
        heapq.heappush(self._queue, (handle.due, handle.order, handle))
        return handle

    def advance(self, seconds: float) -> int:
        """Move virtual time forward, firing due callbacks. Returns fired count."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = due
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        self.now = target
        return fired

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)
