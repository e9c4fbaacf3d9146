"""The path of filled cells the player is drawing."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from fillpath.core.grid import Grid, Position

logger = logging.getLogger(__name__)

Connector = Tuple[Position, Position]


class ConnectorChange(Enum):
    APPENDED = "appended"
    PREPENDED = "prepended"
    REMOVED_BACK = "removed_back"
    REMOVED_FRONT = "removed_front"


ConnectorListener = Callable[[ConnectorChange, Connector], None]


class Chain:
    """Ordered run of distinct, 4-adjacent positions.

    Every operation is guarded: it either applies completely (and fills or
    unfills the matching grid cell) or leaves the chain and grid untouched and
    returns False. Callers never get an exception for an illegal move.
    """

    def __init__(self, grid: Grid) -> None:
        self._grid = grid
        self._points: List[Position] = []
        self._listeners: List[ConnectorListener] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._points)

    def __contains__(self, pos: object) -> bool:
        return pos in self._points

    @property
    def head(self) -> Optional[Position]:
        return self._points[0] if self._points else None

    @property
    def tail(self) -> Optional[Position]:
        return self._points[-1] if self._points else None

    def is_empty(self) -> bool:
        return not self._points

    def positions(self) -> Tuple[Position, ...]:
        return tuple(self._points)

    def connectors(self) -> List[Connector]:
        return list(zip(self._points, self._points[1:]))

    def add_listener(self, listener: ConnectorListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ConnectorListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _is_open(self, pos: Position) -> bool:
        return self._grid.is_valid(pos) and not self._grid.is_filled(pos) and pos not in self._points

    def can_start_at(self, pos: Position) -> bool:
        return self.is_empty() and self._grid.is_valid(pos) and not self._grid.is_filled(pos)

    def start(self, anchor: Position, candidate: Position) -> bool:
        anchor, candidate = Position(*anchor), Position(*candidate)
        if not self.can_start_at(anchor) or not self._is_open(candidate):
            return False
        if not anchor.is_neighbour(candidate):
            return False
        self._points = [anchor, candidate]
        self._grid.fill(anchor)
        self._grid.fill(candidate)
        self._notify(ConnectorChange.APPENDED, (anchor, candidate))
        return True

    def extend_at_tail(self, candidate: Position) -> bool:
        candidate = Position(*candidate)
        tail = self.tail
        if tail is None or not self._is_open(candidate) or not tail.is_neighbour(candidate):
            return False
        self._points.append(candidate)
        self._grid.fill(candidate)
        self._notify(ConnectorChange.APPENDED, (tail, candidate))
        return True

    def extend_at_head(self, candidate: Position) -> bool:
        candidate = Position(*candidate)
        head = self.head
        if head is None or not self._is_open(candidate) or not head.is_neighbour(candidate):
            return False
        self._points.insert(0, candidate)
        self._grid.fill(candidate)
        self._notify(ConnectorChange.PREPENDED, (candidate, head))
        return True

    def retract_from_tail(self, candidate: Position) -> bool:
        """Drop the tail when *candidate* is the cell just before it."""
        if len(self._points) < 2 or Position(*candidate) != self._points[-2]:
            return False
        old_tail = self._points.pop()
        self._grid.unfill(old_tail)
        self._notify(ConnectorChange.REMOVED_BACK, (self._points[-1], old_tail))
        return True

    def retract_from_head(self, candidate: Position) -> bool:
        """Drop the head when *candidate* is the cell just after it."""
        if len(self._points) < 2 or Position(*candidate) != self._points[1]:
            return False
        old_head = self._points.pop(0)
        self._grid.unfill(old_head)
        self._notify(ConnectorChange.REMOVED_FRONT, (old_head, self._points[0]))
        return True

    def _notify(self, change: ConnectorChange, connector: Connector) -> None:
        logger.debug("connector %s %s -> %s", change.value, tuple(connector[0]), tuple(connector[1]))
        for listener in list(self._listeners):
            listener(change, connector)
