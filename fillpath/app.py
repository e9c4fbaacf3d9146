"""Application entry point and setup for the Fill Path puzzle."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from fillpath.core.levels import LevelRepository
from fillpath.core.session import PuzzleSession
from fillpath.core.settings import Settings
from fillpath.ui.main_window import MainWindow
from fillpath.ui.timers import QtScheduler


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the configured level and start the main window."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = QApplication(sys.argv)
    app.setApplicationName("Fill Path")
    app.setApplicationDisplayName("Fill Path")

    levels = LevelRepository(settings.levels_dir)
    if settings.level_key:
        try:
            level = levels.get(settings.level_key)
        except KeyError:
            logging.warning(f"Unknown level {settings.level_key!r}; starting with the first level")
            level = levels.first()
    else:
        level = levels.first()
    logging.info(f"Starting level {level.key}: {level.name} ({level.rows}x{level.cols})")

    session = PuzzleSession(level, QtScheduler(app), reset_delay=settings.reset_delay)
    window = MainWindow(session)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
