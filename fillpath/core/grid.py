"""Fixed-size board of cells with blocked/filled flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, NamedTuple, Sequence

from fillpath.core.levels import BLOCKED, Level, check_level_shape

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    row: int
    col: int

    def is_neighbour(self, other: "Position") -> bool:
        """True if *other* is one step up, down, left or right of this position."""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1


class CellChange(Enum):
    FILLED = "filled"
    UNFILLED = "unfilled"
    TOGGLED = "toggled"


@dataclass
class Cell:
    blocked: bool = False
    filled: bool = False


CellListener = Callable[[Position, CellChange], None]


class Grid:
    """A rows x cols lattice of cells.

    Blocked cells are always filled. Every other cell is filled only while it
    is part of the chain; the grid itself does not know about the chain and
    only applies the flag changes it is asked for.
    """

    def __init__(self, rows: int, cols: int, flags: Sequence[int]) -> None:
        check_level_shape(rows, cols, flags)
        self._rows = rows
        self._cols = cols
        self._cells: List[List[Cell]] = []
        for i in range(rows):
            row: List[Cell] = []
            for j in range(cols):
                blocked = flags[i * cols + j] == BLOCKED
                row.append(Cell(blocked=blocked, filled=blocked))
            self._cells.append(row)
        self._listeners: List[CellListener] = []

    @classmethod
    def from_level(cls, level: Level) -> "Grid":
        return cls(level.rows, level.cols, level.data)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def add_listener(self, listener: CellListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: CellListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def is_valid(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self._rows and 0 <= col < self._cols

    def cell(self, pos: Position) -> Cell:
        if not self.is_valid(pos):
            raise IndexError(f"{tuple(pos)} is outside a {self._rows}x{self._cols} grid")
        row, col = pos
        return self._cells[row][col]

    def is_filled(self, pos: Position) -> bool:
        return self.cell(pos).filled

    def is_blocked(self, pos: Position) -> bool:
        return self.cell(pos).blocked

    def positions(self) -> Iterator[Position]:
        for i in range(self._rows):
            for j in range(self._cols):
                yield Position(i, j)

    def fill(self, pos: Position) -> bool:
        """Mark an empty cell as filled. Returns False if nothing changed."""
        if not self.is_valid(pos):
            return False
        cell = self.cell(pos)
        if cell.filled:
            return False
        cell.filled = True
        self._notify(Position(*pos), CellChange.FILLED)
        return True

    def unfill(self, pos: Position) -> bool:
        """Clear a filled cell.

        Blocked cells stay filled: unfilling one is a no-op, as is unfilling
        an empty cell or a position outside the grid.
        """
        if not self.is_valid(pos):
            return False
        cell = self.cell(pos)
        if cell.blocked or not cell.filled:
            return False
        cell.filled = False
        self._notify(Position(*pos), CellChange.UNFILLED)
        return True

    def toggle_blocked(self, pos: Position) -> bool:
        if not self.is_valid(pos):
            return False
        cell = self.cell(pos)
        cell.blocked = not cell.blocked
        cell.filled = cell.blocked
        self._notify(Position(*pos), CellChange.TOGGLED)
        return True

    def filled_count(self) -> int:
        return sum(1 for row in self._cells for cell in row if cell.filled)

    def all_filled(self) -> bool:
        return all(cell.filled for row in self._cells for cell in row)

    def _notify(self, pos: Position, change: CellChange) -> None:
        logger.debug("cell %s %s", tuple(pos), change.value)
        for listener in list(self._listeners):
            listener(pos, change)
