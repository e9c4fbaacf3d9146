"""One-shot delayed callbacks.

The core never sleeps or spins an event loop. Anything time based (only the
pause between winning and reloading the level) goes through a ``Scheduler``.
The Qt front end supplies one backed by ``QTimer``; ``ManualScheduler`` is a
clock that only moves when told to, for headless runs and tests.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Callable, List, Protocol


class ScheduledCall(Protocol):
    @property
    def cancelled(self) -> bool: ...

    @property
    def done(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


@dataclass(order=True)
class ManualCall:
    due: float
    order: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    done: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        if not self.done:
            self.cancelled = True


class ManualScheduler:
    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[ManualCall] = []
        self._order = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        self._order += 1
        call = ManualCall(self.now + max(0.0, delay), self._order, callback)
        heapq.heappush(self._queue, call)
        return call

    def pending(self) -> int:
        return sum(1 for call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every call that came due. Returns how many ran."""
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0].due <= target:
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = call.due
            call.done = True
            call.callback()
            ran += 1
        self.now = target
        return ran
