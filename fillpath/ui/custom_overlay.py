"""In-window "level complete" overlay."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QLabel,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from fillpath.ui.colors import BoardColors


def _themed_card_container(radius: int = 20, object_name: str = "overlayContainer") -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(320)
    container.setMaximumWidth(420)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #ffffff;
            border: 1px solid rgba(0, 131, 143, 0.12);
            border-radius: {radius}px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(20)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(0, 80, 100, 25))
    container.setGraphicsEffect(shadow)
    return container


class LevelCompletedOverlay(QWidget):
    """Dims the board and announces the win until the level reloads.

    Clicks are swallowed; the window hides the overlay when it resets the
    session.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        overlay_bg = QWidget(self)
        overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.2);")
        overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        overlay_bg.setMinimumSize(1, 1)
        main_layout.addWidget(overlay_bg, 0, 0)

        container = _themed_card_container(object_name="levelCompleteContainer")
        content = QVBoxLayout(container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(10)

        self._title = QLabel("Level complete!")
        self._title.setAlignment(Qt.AlignCenter)
        self._title.setStyleSheet(
            f"color: {BoardColors.PRIMARY}; font-size: 22px; font-weight: 900; background: transparent;"
        )
        self._subtitle = QLabel("Restarting…")
        self._subtitle.setAlignment(Qt.AlignCenter)
        self._subtitle.setStyleSheet(
            f"color: {BoardColors.TEXT_SECONDARY}; font-size: 13px; background: transparent;"
        )
        content.addWidget(self._title)
        content.addWidget(self._subtitle)

        main_layout.addWidget(container, 0, 0, Qt.AlignCenter)
        self.hide()

    def set_level_name(self, name: str) -> None:
        self._title.setText(f"{name} complete!")

    def mousePressEvent(self, event) -> None:
        event.accept()
