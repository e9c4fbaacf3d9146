from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QResizeEvent
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from fillpath.core.controller import Transition
from fillpath.core.session import PuzzleSession
from fillpath.ui.board_widget import BoardWidget
from fillpath.ui.colors import BoardColors
from fillpath.ui.custom_overlay import LevelCompletedOverlay

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen window: level title, board and a fill counter.

    When the board is full the overlay covers it; the session's delayed
    level-complete signal then resets the level and removes the overlay.
    """

    def __init__(self, session: PuzzleSession) -> None:
        super().__init__()
        self._session = session
        self._title_label: Optional[QLabel] = None
        self._status_label: Optional[QLabel] = None
        self._board: Optional[BoardWidget] = None
        self._overlay: Optional[LevelCompletedOverlay] = None

        self._build_ui()
        session.add_complete_listener(self._restart_level)
        self._update_status()

    def _build_ui(self) -> None:
        self.setWindowTitle(f"Fill Path – {self._session.level.name}")
        self.resize(720, 760)

        central = QWidget()
        central.setObjectName("central")
        central.setStyleSheet(
            f"""
            QWidget#central {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {BoardColors.BG_TOP}, stop:1 {BoardColors.BG_BOTTOM});
            }}
            """
        )
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(12)

        self._title_label = QLabel(self._session.level.name)
        self._title_label.setAlignment(Qt.AlignCenter)
        self._title_label.setStyleSheet(
            f"color: {BoardColors.TEXT_PRIMARY}; font-size: 24px; font-weight: 900; background: transparent;"
        )

        self._board = BoardWidget(self._session, on_stroke=self._on_stroke)

        self._status_label = QLabel("")
        self._status_label.setAlignment(Qt.AlignCenter)
        self._status_label.setStyleSheet(
            f"color: {BoardColors.TEXT_SECONDARY}; font-size: 14px; font-weight: 600; background: transparent;"
        )

        layout.addWidget(self._title_label)
        layout.addWidget(self._board, 1)
        layout.addWidget(self._status_label)
        self.setCentralWidget(central)

        self._overlay = LevelCompletedOverlay(central)
        self._overlay.set_level_name(self._session.level.name)

    def _on_stroke(self, transition: Transition) -> None:
        self._update_status()
        if self._session.finished:
            self._show_overlay()

    def _update_status(self) -> None:
        if self._status_label is None:
            return
        filled = self._session.filled_count
        total = self._session.total_cells
        self._status_label.setText(f"{filled}/{total} cells filled")

    def _show_overlay(self) -> None:
        overlay = self._overlay
        if overlay is None or overlay.isVisible():
            return
        overlay.setGeometry(self.centralWidget().rect())
        overlay.raise_()
        overlay.show()

    def _restart_level(self) -> None:
        """Level-complete signal: reload the board from the level data."""
        logger.debug("Restarting %s after win", self._session.level.key)
        self._session.reset()
        if self._board is not None:
            self._board.sync_from_session()
        if self._overlay is not None:
            self._overlay.hide()
        self._update_status()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._overlay is not None and self._overlay.isVisible():
            self._overlay.setGeometry(self.centralWidget().rect())

    def closeEvent(self, event: QCloseEvent) -> None:
        """Drop any pending restart so it cannot fire after the window is gone."""
        self._session.cancel_pending()
        super().closeEvent(event)
