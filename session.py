from __future__ import annotations

import logging
import random
from typing import Dict, Optional, Set, Tuple

from config import GameMode
from errors import InvalidMove
from model import MoveOutcome, PuzzleBoard
from rules import Cell

logger = logging.getLogger(__name__)


class GameSession:
    """One game as seen by a front end.

    Wraps a prepared ``PuzzleBoard`` and keeps the screen-level state the
    board itself does not care about: which cells are clues, which player
    entries have been confirmed, which were rejected, and the play clock.
    """

    def __init__(
        self,
        mode: GameMode,
        rng: Optional[random.Random] = None,
        clues: Optional[int] = None,
    ) -> None:
        self.mode = mode
        self.rng = rng or random.Random()
        self.board = PuzzleBoard(
            mode.rows, mode.cols, mode.box_width, mode.box_height, rng=self.rng
        )
        self.board.prepare_board(mode.clues if clues is None else clues)
        self.clue_cells: Set[Cell] = {
            cell for cell in self.board.layout.cells() if self.board.get_current_at(*cell)
        }
        self.locked_cells: Set[Cell] = set()
        # Rejected or incorrect entries, with the digit the player sees.
        self.wrong_cells: Dict[Cell, int] = {}
        self.seconds_elapsed = 0
        self.running = False
        self.is_won = False

    def enter(self, row: int, col: int, value: int) -> MoveOutcome:
        cell = (row, col)
        if cell in self.clue_cells or cell in self.locked_cells:
            raise InvalidMove(f"Cell r{row + 1} c{col + 1} cannot be edited.")
        outcome = self.board.make_move(row, col, value)
        if outcome.is_conflict:
            # The rejected digit replaces whatever the board held there.
            self.board.make_move(row, col, 0)
            self.wrong_cells[cell] = value
        else:
            self.wrong_cells.pop(cell, None)
        if outcome is MoveOutcome.WON:
            self.is_won = True
            self.running = False
            logger.info("Puzzle solved in %s", self.elapsed_text())
        return outcome

    def check(self) -> Dict[Cell, bool]:
        results: Dict[Cell, bool] = {}
        for cell in self.board.layout.cells():
            if cell in self.clue_cells or not self.board.get_current_at(*cell):
                continue
            correct = self.board.is_correct(*cell)
            results[cell] = correct
            if correct:
                self.locked_cells.add(cell)
                self.wrong_cells.pop(cell, None)
            else:
                self.wrong_cells[cell] = self.board.get_current_at(*cell)
        return results

    def hint(self, attempts: int = 3) -> Optional[Tuple[Cell, int]]:
        # Random probing, so a nearly full board may yield no hint.
        for _ in range(attempts):
            r = self.rng.randrange(self.board.rows)
            c = self.rng.randrange(self.board.cols)
            if self.board.get_current_at(r, c) == 0:
                value = self.board.get_answer_at(r, c)
                outcome = self.board.make_move(r, c, value)
                if outcome.is_conflict:
                    # A wrong entry elsewhere already holds this digit.
                    continue
                self.locked_cells.add((r, c))
                self.wrong_cells.pop((r, c), None)
                if outcome is MoveOutcome.WON:
                    self.is_won = True
                    self.running = False
                return (r, c), value
        return None

    def cell_status(self, row: int, col: int) -> str:
        cell = (row, col)
        if cell in self.clue_cells:
            return "clue"
        if cell in self.locked_cells:
            return "locked"
        if cell in self.wrong_cells:
            return "wrong"
        return "open"

    def display_value(self, row: int, col: int) -> int:
        return self.wrong_cells.get((row, col), self.board.get_current_at(row, col))

    def start(self) -> None:
        self.running = not self.is_won

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.start()

    def tick(self, seconds: int = 1) -> None:
        if self.running:
            self.seconds_elapsed += seconds

    def elapsed_text(self) -> str:
        return format_elapsed(self.seconds_elapsed)


def format_elapsed(seconds: int) -> str:
    return f"Time: {(seconds % 3600) // 60:02d}:{seconds % 60:02d}"
