"""Puzzle board: paints cells and connectors, turns mouse drags into grid events."""

from __future__ import annotations

import math
from typing import Callable, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QWidget

from fillpath.core.chain import Connector, ConnectorChange
from fillpath.core.controller import Transition
from fillpath.core.grid import CellChange, Position
from fillpath.core.session import PuzzleSession
from fillpath.ui.colors import BoardColors, blend_hex, color_for
from fillpath.ui.models import ConnectorView

_FADE_MS = 180


class BoardWidget(QWidget):
    """Square cells framed to fit the widget, row 0 at the top.

    Left button press/drag feeds the session; right click toggles a cell
    between blocked and empty.
    """

    def __init__(
        self,
        session: PuzzleSession,
        *,
        on_stroke: Optional[Callable[[Transition], None]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._on_stroke = on_stroke
        self._connectors: list[ConnectorView] = []
        self._fading: set[Position] = set()
        self._last_cell: Optional[Position] = None
        self.setMinimumSize(240, 240)
        self.setMouseTracking(False)

        session.add_cell_listener(self._on_cell_changed)
        session.add_connector_listener(self._on_connector_changed)
        self.sync_from_session()

    def sync_from_session(self) -> None:
        """Rebuild the connector list from the chain (after a reset)."""
        self._connectors = [ConnectorView.between(a, b) for a, b in self._session.chain.connectors()]
        self._fading.clear()
        self._last_cell = None
        self.update()

    # -- observation feeds ---------------------------------------------------

    def _on_cell_changed(self, pos: Position, change: CellChange) -> None:
        if change is CellChange.UNFILLED:
            self._fading.add(pos)
            QTimer.singleShot(_FADE_MS, lambda p=pos: self._end_fade(p))
        else:
            self._fading.discard(pos)
        self.update()

    def _end_fade(self, pos: Position) -> None:
        if pos in self._fading:
            self._fading.discard(pos)
            self.update()

    def _on_connector_changed(self, change: ConnectorChange, connector: Connector) -> None:
        if change is ConnectorChange.APPENDED:
            self._connectors.append(ConnectorView.between(*connector))
        elif change is ConnectorChange.PREPENDED:
            self._connectors.insert(0, ConnectorView.between(*connector))
        elif change is ConnectorChange.REMOVED_BACK and self._connectors:
            self._connectors.pop()
        elif change is ConnectorChange.REMOVED_FRONT and self._connectors:
            self._connectors.pop(0)
        self.update()

    # -- geometry ------------------------------------------------------------

    def _layout(self) -> tuple[float, float, float]:
        """Return (cell_size, origin_x, origin_y) for the current widget size."""
        grid = self._session.grid
        margin = 16.0
        cell = max(1.0, min((self.width() - 2 * margin) / grid.cols, (self.height() - 2 * margin) / grid.rows))
        ox = (self.width() - cell * grid.cols) / 2.0
        oy = (self.height() - cell * grid.rows) / 2.0
        return cell, ox, oy

    def cell_at(self, point: QPointF) -> Position:
        """Map a widget point to a grid position. The result may lie outside the grid."""
        cell, ox, oy = self._layout()
        return Position(math.floor((point.y() - oy) / cell), math.floor((point.x() - ox) / cell))

    # -- pointer tracking ----------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        pos = self.cell_at(event.position())
        if event.button() == Qt.MouseButton.RightButton:
            if self._session.toggle_blocked(pos):
                self._notify(Transition.NONE)
            return
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._last_cell = pos
        self._session.press(pos)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if not event.buttons() & Qt.MouseButton.LeftButton:
            return
        pos = self.cell_at(event.position())
        if pos == self._last_cell:
            return
        self._last_cell = pos
        self._notify(self._session.drag(pos))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._last_cell = None
            self._session.release()

    def _notify(self, transition: Transition) -> None:
        if self._on_stroke is not None:
            self._on_stroke(transition)

    # -- painting ------------------------------------------------------------

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        grid = self._session.grid
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        cell, ox, oy = self._layout()
        gap = max(1.0, cell * 0.06)
        radius = max(2.0, cell * 0.14)

        for pos in grid.positions():
            state = grid.cell(pos)
            fill = color_for(state.blocked, state.filled)
            if pos in self._fading and not state.filled:
                fill = blend_hex(BoardColors.CELL_FILLED, BoardColors.CELL_EMPTY, 0.5)
            rect = QRectF(ox + pos.col * cell + gap, oy + pos.row * cell + gap, cell - 2 * gap, cell - 2 * gap)
            painter.setBrush(QColor(fill))
            painter.setPen(QPen(QColor(BoardColors.CELL_BORDER), 1))
            painter.drawRoundedRect(rect, radius, radius)

        thickness = max(3.0, cell * 0.22)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(BoardColors.CONNECTOR))
        for view in self._connectors:
            cx = ox + view.center_x * cell
            cy = oy + view.center_y * cell
            if view.horizontal:
                rect = QRectF(cx - cell / 2.0, cy - thickness / 2.0, cell, thickness)
            else:
                rect = QRectF(cx - thickness / 2.0, cy - cell / 2.0, thickness, cell)
            painter.drawRoundedRect(rect, thickness / 2.0, thickness / 2.0)

        dot = thickness * 1.1
        for pos in self._session.chain:
            cx = ox + (pos.col + 0.5) * cell
            cy = oy + (pos.row + 0.5) * cell
            painter.drawEllipse(QPointF(cx, cy), dot / 2.0, dot / 2.0)
        painter.end()
