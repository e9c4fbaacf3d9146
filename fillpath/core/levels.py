from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

EMPTY = 0
BLOCKED = 1


class InvalidLevel(ValueError):
    """Level data does not describe a rows x cols board of 0/1 flags."""


def check_level_shape(rows: int, cols: int, data: Sequence[int]) -> None:
    """Raise InvalidLevel unless *data* holds exactly rows*cols flags of 0 or 1."""
    if rows <= 0 or cols <= 0:
        raise InvalidLevel(f"rows and cols must be positive, got {rows}x{cols}")
    if len(data) != rows * cols:
        raise InvalidLevel(f"expected {rows * cols} cells for {rows}x{cols}, got {len(data)}")
    for index, value in enumerate(data):
        if value not in (EMPTY, BLOCKED):
            raise InvalidLevel(f"cell {index} has value {value!r}; expected 0 or 1")


@dataclass(frozen=True)
class Level:
    key: str
    name: str
    rows: int
    cols: int
    data: Tuple[int, ...]

    @property
    def blocked_count(self) -> int:
        return sum(1 for value in self.data if value == BLOCKED)


def _parse_data(name: str, raw_data: object) -> List[int]:
    if isinstance(raw_data, str):
        values: List[int] = []
        for line in raw_data.strip().splitlines():
            for ch in line.replace(",", " ").split():
                # rows may be written "0 1 0" or "010"
                if not ch.isdigit():
                    raise ValueError(f"{name}: non-numeric cell {ch!r} in 'data'")
                values.extend(int(digit) for digit in ch)
        return values
    if isinstance(raw_data, list):
        values = []
        for item in raw_data:
            if isinstance(item, list):
                values.extend(int(v) for v in item)
            else:
                values.append(int(item))
        return values
    raise ValueError(f"{name}: 'data' must be a list or a multiline string")


def parse_level(key: str, raw: object, name: str = "") -> Level:
    """Build a Level from a decoded YAML mapping."""
    name = name or key
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{name}: expected YAML with 'title', 'rows', 'cols' and 'data'")
    title = raw.get("title")
    if not title or not isinstance(title, str):
        raise ValueError(f"{name}: missing or invalid 'title'")
    rows = raw.get("rows")
    cols = raw.get("cols")
    if not isinstance(rows, int) or not isinstance(cols, int) or rows <= 0 or cols <= 0:
        raise ValueError(f"{name}: 'rows' and 'cols' must be positive integers")
    if raw.get("data") is None:
        raise ValueError(f"{name}: missing 'data'")
    data = _parse_data(name, raw["data"])
    try:
        check_level_shape(rows, cols, data)
    except InvalidLevel as e:
        raise InvalidLevel(f"{name}: {e}") from e
    # a chain starts with two cells, so fewer open cells can never be won
    if data.count(EMPTY) < 2:
        raise InvalidLevel(f"{name}: needs at least 2 empty cells, found {data.count(EMPTY)}")
    return Level(key=key, name=title.strip(), rows=rows, cols=cols, data=tuple(data))


class LevelRepository:
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "levels"
        self._levels = self._load_levels()

    def all(self) -> List[Level]:
        return list(self._levels.values())

    def get(self, key: str) -> Level:
        return self._levels[key]

    def first(self) -> Level:
        return next(iter(self._levels.values()))

    def _load_levels(self) -> Dict[str, Level]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Levels directory not found: {base_dir}")

        levels: Dict[str, Level] = {}

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^level(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        for level_path in sorted(base_dir.glob("level*.yaml"), key=_sort_key):
            key = level_path.stem
            raw = yaml.safe_load(level_path.read_text(encoding="utf-8"))
            levels[key] = parse_level(key, raw, level_path.name)
            logger.debug("Loaded %s (%dx%d)", level_path.name, levels[key].rows, levels[key].cols)

        if not levels:
            raise ValueError(f"No level files (level*.yaml) found in {base_dir}")
        logger.info("Loaded %d level(s) from %s", len(levels), base_dir)
        return levels
