"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass

from fillpath.core.grid import Position


@dataclass(frozen=True)
class ConnectorView:
    """Geometry of the bar joining two consecutive chain cells, in cell units.

    Cell ``(row, col)`` covers ``[col, col + 1) x [row, row + 1)``, so the bar
    sits halfway between the two cell centres.
    """

    start: Position
    end: Position
    center_x: float
    center_y: float
    horizontal: bool

    @classmethod
    def between(cls, start: Position, end: Position) -> "ConnectorView":
        return cls(
            start=start,
            end=end,
            center_x=start.col * 0.5 + 0.5 + end.col * 0.5,
            center_y=start.row * 0.5 + 0.5 + end.row * 0.5,
            horizontal=(end.col - start.col) != 0,
        )
