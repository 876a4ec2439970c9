from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Union

from errors import InvalidConfiguration
from rules import BoxLayout

CLUES_ENV = "SUDOKU_CLUES"
LOG_LEVEL_ENV = "SUDOKU_LOG_LEVEL"


@dataclass(frozen=True)
class GameMode:
    name: str
    title: str
    rows: int
    cols: int
    box_width: int
    box_height: int
    clues: int

    def layout(self) -> BoxLayout:
        return BoxLayout.create(self.rows, self.cols, self.box_width, self.box_height)


EASY = GameMode("easy", "Sudoku: Easy", 6, 6, box_width=3, box_height=2, clues=15)
NORMAL = GameMode("normal", "Sudoku: Normal", 9, 9, box_width=3, box_height=3, clues=30)

MODES: Dict[str, GameMode] = {mode.name: mode for mode in (EASY, NORMAL)}


def get_mode(name: str) -> GameMode:
    try:
        return MODES[name.lower()]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown game mode '{name}'. Choose from: {', '.join(MODES)}."
        ) from None


def clue_override() -> Optional[int]:
    raw = os.environ.get(CLUES_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfiguration(
            f"{CLUES_ENV} must be an integer, got '{raw}'."
        ) from None


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    level = level or os.environ.get(LOG_LEVEL_ENV) or "WARNING"
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
