"""QTimer-backed scheduler for the Qt front end."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtScheduledCall:
    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self._timer = timer
        self._callback = callback
        self.cancelled = False
        self.done = False
        timer.timeout.connect(self._run)

    def _run(self) -> None:
        if self.cancelled:
            return
        self.done = True
        self._timer.deleteLater()
        self._callback()

    def cancel(self) -> None:
        if self.done or self.cancelled:
            return
        self.cancelled = True
        self._timer.stop()
        self._timer.deleteLater()


class QtScheduler:
    """Runs callbacks on the Qt event loop after a delay given in seconds."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def call_later(self, delay: float, callback: Callable[[], None]) -> QtScheduledCall:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        call = QtScheduledCall(timer, callback)
        timer.start(max(0, int(delay * 1000)))
        return call
