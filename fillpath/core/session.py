from __future__ import annotations

import logging
from typing import Callable, List

from fillpath.core.chain import Chain, ConnectorListener
from fillpath.core.controller import PositionLike, PuzzleState, StrokeController, Transition
from fillpath.core.grid import CellListener, Grid, Position
from fillpath.core.levels import Level
from fillpath.core.timers import Scheduler
from fillpath.core.win import RESET_DELAY_SECONDS, WinEvaluator

logger = logging.getLogger(__name__)


class PuzzleSession:
    """Owns the live state for one level: grid, chain, controller and win check.

    Observers registered here survive ``reset``: the session re-attaches them
    to the freshly built grid and chain, so a view only subscribes once.
    """

    def __init__(self, level: Level, scheduler: Scheduler, reset_delay: float = RESET_DELAY_SECONDS) -> None:
        """Build the board for *level*; the level-complete signal fires *reset_delay* seconds after a win."""
        self._level = level
        self._scheduler = scheduler
        self._reset_delay = reset_delay
        self._cell_listeners: List[CellListener] = []
        self._connector_listeners: List[ConnectorListener] = []
        self._complete_listeners: List[Callable[[], None]] = []
        self._build()

    def _build(self) -> None:
        self._grid = Grid.from_level(self._level)
        self._chain = Chain(self._grid)
        self._win = WinEvaluator(self._grid, self._scheduler, self._reset_delay)
        self._controller = StrokeController(self._grid, self._chain, self._win)
        for cell_listener in self._cell_listeners:
            self._grid.add_listener(cell_listener)
        for connector_listener in self._connector_listeners:
            self._chain.add_listener(connector_listener)
        self._win.add_listener(self._on_complete)

    @property
    def level(self) -> Level:
        return self._level

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def state(self) -> PuzzleState:
        return self._controller.state

    @property
    def finished(self) -> bool:
        """True once every cell is filled; input is ignored from then on."""
        return self._win.finished

    @property
    def filled_count(self) -> int:
        return self._grid.filled_count()

    @property
    def total_cells(self) -> int:
        return self._grid.size

    @property
    def progress(self) -> float:
        """Fraction of cells filled, 0.0 to 1.0."""
        return self._grid.filled_count() / float(self._grid.size)

    def add_cell_listener(self, listener: CellListener) -> None:
        self._cell_listeners.append(listener)
        self._grid.add_listener(listener)

    def add_connector_listener(self, listener: ConnectorListener) -> None:
        self._connector_listeners.append(listener)
        self._chain.add_listener(listener)

    def add_complete_listener(self, listener: Callable[[], None]) -> None:
        """Call *listener* when the delayed level-complete signal fires."""
        self._complete_listeners.append(listener)

    def press(self, pos: PositionLike) -> None:
        self._controller.press(pos)

    def drag(self, pos: PositionLike) -> Transition:
        return self._controller.drag(pos)

    def release(self) -> None:
        self._controller.release()

    def toggle_blocked(self, pos: PositionLike) -> bool:
        """Flip a cell between blocked and empty. Cells on the chain cannot be toggled."""
        pos = Position(*pos)
        if self.finished or not self._grid.is_valid(pos) or pos in self._chain:
            return False
        self._grid.toggle_blocked(pos)
        self._win.check()
        return True

    def cancel_pending(self) -> None:
        """Drop a level-complete signal that has not fired yet."""
        self._win.cancel()

    def reset(self) -> None:
        """Throw away the current board and rebuild it from the level data."""
        self._win.cancel()
        for cell_listener in self._cell_listeners:
            self._grid.remove_listener(cell_listener)
        for connector_listener in self._connector_listeners:
            self._chain.remove_listener(connector_listener)
        self._build()
        logger.info("Level %s reset", self._level.key)

    def _on_complete(self) -> None:
        logger.info("Level %s complete", self._level.key)
        for listener in list(self._complete_listeners):
            listener()
