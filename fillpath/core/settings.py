"""Runtime settings read from ``FILLPATH_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from fillpath.core.win import RESET_DELAY_SECONDS

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    level_key: Optional[str] = None
    levels_dir: Optional[Path] = None
    reset_delay: float = RESET_DELAY_SECONDS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        level_key = env.get("FILLPATH_LEVEL", "").strip() or None

        levels_dir: Optional[Path] = None
        raw_dir = env.get("FILLPATH_LEVELS_DIR", "").strip()
        if raw_dir:
            levels_dir = Path(raw_dir).expanduser()

        reset_delay = RESET_DELAY_SECONDS
        raw_delay = env.get("FILLPATH_RESET_DELAY", "").strip()
        if raw_delay:
            try:
                reset_delay = float(raw_delay)
            except ValueError:
                logger.warning("Ignoring FILLPATH_RESET_DELAY=%r: not a number", raw_delay)
            else:
                if reset_delay < 0:
                    logger.warning("Ignoring FILLPATH_RESET_DELAY=%r: must not be negative", raw_delay)
                    reset_delay = RESET_DELAY_SECONDS

        log_level = "INFO"
        raw_level = env.get("FILLPATH_LOG_LEVEL", "").strip().upper()
        if raw_level:
            if raw_level in _LOG_LEVELS:
                log_level = raw_level
            else:
                logger.warning("Ignoring FILLPATH_LOG_LEVEL=%r: unknown level", raw_level)

        return cls(level_key=level_key, levels_dir=levels_dir, reset_delay=reset_delay, log_level=log_level)
