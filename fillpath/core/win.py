from __future__ import annotations

import logging
from typing import Callable, List, Optional

from fillpath.core.grid import Grid
from fillpath.core.timers import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)

RESET_DELAY_SECONDS = 2.0


class WinEvaluator:
    """Detects a fully filled grid and emits the delayed level-complete signal.

    Finishing is terminal: once every cell is filled the evaluator stays
    finished, and the level-complete listeners run exactly once, ``delay``
    seconds later, unless ``cancel`` is called first.
    """

    def __init__(self, grid: Grid, scheduler: Scheduler, delay: float = RESET_DELAY_SECONDS) -> None:
        self._grid = grid
        self._scheduler = scheduler
        self._delay = delay
        self._finished = False
        self._fired = False
        self._pending: Optional[ScheduledCall] = None
        self._listeners: List[Callable[[], None]] = []

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def fired(self) -> bool:
        """True once the level-complete listeners have run."""
        return self._fired

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def check(self) -> bool:
        if self._finished:
            return True
        if not self._grid.all_filled():
            return False
        self._finished = True
        logger.info("Level complete; signalling in %.1fs", self._delay)
        self._pending = self._scheduler.call_later(self._delay, self._fire)
        return True

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done:
            self._pending.cancel()
            logger.debug("Pending level-complete signal cancelled")
        self._pending = None

    def _fire(self) -> None:
        self._pending = None
        if self._fired:
            return
        self._fired = True
        for listener in list(self._listeners):
            listener()
