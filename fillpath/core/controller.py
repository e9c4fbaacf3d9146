"""Turns a press/drag stream into chain transitions."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple, Union

from fillpath.core.chain import Chain
from fillpath.core.grid import Grid, Position
from fillpath.core.win import WinEvaluator

logger = logging.getLogger(__name__)

PositionLike = Union[Position, Tuple[int, int]]


class Transition(Enum):
    NONE = "none"
    START = "start"
    EXTEND_TAIL = "extend_tail"
    EXTEND_HEAD = "extend_head"
    RETRACT_TAIL = "retract_tail"
    RETRACT_HEAD = "retract_head"


class PuzzleState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    FINISHED = "finished"


class StrokeController:
    """Applies one drag sample at a time to the chain.

    ``press`` sets the anchor cell. Each ``drag`` names the cell the pointer
    is now over; if it is a neighbour of the anchor, the first matching rule
    wins, in this order: start a chain, extend at the tail, extend at the
    head, retract from the tail, retract from the head. The anchor then moves
    to the dragged cell whether or not a rule matched.

    Out-of-bounds cells and moves that match no rule are ignored silently.
    """

    def __init__(self, grid: Grid, chain: Chain, win: WinEvaluator) -> None:
        self._grid = grid
        self._chain = chain
        self._win = win
        self._start_pos: Optional[Position] = None
        self._end_pos: Optional[Position] = None
        self._state = PuzzleState.IDLE

    @property
    def state(self) -> PuzzleState:
        if self._win.finished:
            return PuzzleState.FINISHED
        return self._state

    @property
    def anchor(self) -> Optional[Position]:
        return self._start_pos

    def press(self, pos: PositionLike) -> None:
        if self._win.finished:
            return
        self._start_pos = self._end_pos = Position(*pos)
        self._state = PuzzleState.DRAWING

    def release(self) -> None:
        self._start_pos = self._end_pos = None

    def drag(self, pos: PositionLike) -> Transition:
        if self._win.finished or self._start_pos is None:
            return Transition.NONE
        self._end_pos = Position(*pos)
        if not self._is_neighbour():
            return Transition.NONE

        transition = self._apply()
        if transition is not Transition.NONE:
            logger.debug("%s %s -> %s", transition.value, tuple(self._start_pos), tuple(self._end_pos))
            self._remove_stray_empties()
            self._win.check()
        self._start_pos = self._end_pos
        return transition

    def _is_neighbour(self) -> bool:
        start, end = self._start_pos, self._end_pos
        return (
            start is not None
            and end is not None
            and self._grid.is_valid(start)
            and self._grid.is_valid(end)
            and start.is_neighbour(end)
        )

    def _apply(self) -> Transition:
        start, end = self._start_pos, self._end_pos
        chain = self._chain
        if chain.is_empty():
            if chain.start(start, end):
                return Transition.START
            return Transition.NONE
        if start == chain.tail and chain.extend_at_tail(end):
            return Transition.EXTEND_TAIL
        if start == chain.head and chain.extend_at_head(end):
            return Transition.EXTEND_HEAD
        if start == chain.tail and chain.retract_from_tail(end):
            return Transition.RETRACT_TAIL
        if start == chain.head and chain.retract_from_head(end):
            return Transition.RETRACT_HEAD
        return Transition.NONE

    def _remove_stray_empties(self) -> None:
        # Chain operations keep members filled; this only reports a broken invariant.
        for pos in self._chain:
            cell = self._grid.cell(pos)
            if cell.blocked or not cell.filled:
                logger.warning("Chain member %s is %s", tuple(pos), "blocked" if cell.blocked else "empty")
