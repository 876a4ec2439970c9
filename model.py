from __future__ import annotations

import logging
import random
from enum import Enum
from typing import List, Optional

from errors import InvalidMove
from generator import FullGridGenerator
from rules import (
    BOX,
    COLUMN,
    ROW,
    BoxLayout,
    Grid,
    copy_grid,
    count_filled,
    empty_grid,
    first_conflict,
)
from solver import UniquenessSolver

logger = logging.getLogger(__name__)


class MoveOutcome(Enum):
    VALID = "valid"
    CONFLICT_ROW = "conflict-row"
    CONFLICT_COLUMN = "conflict-column"
    CONFLICT_BOX = "conflict-box"
    WON = "won"

    @property
    def is_conflict(self) -> bool:
        return self in (
            MoveOutcome.CONFLICT_ROW,
            MoveOutcome.CONFLICT_COLUMN,
            MoveOutcome.CONFLICT_BOX,
        )


class BoardState(Enum):
    READY = "ready"
    PLAYABLE = "playable"
    SOLVED = "solved"


_CONFLICT_OUTCOMES = {
    ROW: MoveOutcome.CONFLICT_ROW,
    COLUMN: MoveOutcome.CONFLICT_COLUMN,
    BOX: MoveOutcome.CONFLICT_BOX,
}


class PuzzleBoard:
    """Answer key plus the live grid the player works on.

    The answer key is generated on construction. ``prepare_board`` digs holes
    into a copy of it, keeping a hole only while the remaining puzzle still
    has exactly one completion.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        box_width: int,
        box_height: int,
        generator: Optional[FullGridGenerator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.layout = BoxLayout.create(rows, cols, box_width, box_height)
        self.rng = rng or random.Random()
        generator = generator or FullGridGenerator(rng=self.rng)
        self._answer_key: Grid = generator.generate(self.layout)
        self._board: Grid = empty_grid(self.layout)
        self.filled_count = 0
        self.state = BoardState.READY

    @property
    def rows(self) -> int:
        return self.layout.rows

    @property
    def cols(self) -> int:
        return self.layout.cols

    def prepare_board(self, target_clues: int) -> None:
        self._board = copy_grid(self._answer_key)
        total_cells = self.layout.total_cells
        cells_to_remove = total_cells - target_clues

        positions: List[int] = list(range(total_cells))
        self.rng.shuffle(positions)
        checker = UniquenessSolver(self.layout)

        for pos in positions:
            if cells_to_remove <= 0:
                break
            r, c = divmod(pos, self.cols)
            backup = self._board[r][c]
            self._board[r][c] = 0
            if checker.has_unique_solution(self._board):
                cells_to_remove -= 1
            else:
                self._board[r][c] = backup

        self.filled_count = count_filled(self._board)
        self.state = BoardState.PLAYABLE
        logger.info(
            "Prepared %dx%d board: %d clues (requested %d)",
            self.rows,
            self.cols,
            self.filled_count,
            target_clues,
        )

    def make_move(self, row: int, col: int, value: int) -> MoveOutcome:
        self._check_move(row, col, value)
        if value == 0:
            if self._board[row][col] != 0:
                self.filled_count -= 1
            self._board[row][col] = 0
            return MoveOutcome.VALID

        axis = first_conflict(self._board, self.layout, row, col, value)
        if axis is not None:
            return _CONFLICT_OUTCOMES[axis]

        if self._board[row][col] == 0:
            self.filled_count += 1
        self._board[row][col] = value

        if self.filled_count == self.layout.total_cells and self._matches_answer():
            self.state = BoardState.SOLVED
            return MoveOutcome.WON
        return MoveOutcome.VALID

    def is_correct(self, row: int, col: int) -> bool:
        return self._board[row][col] == self._answer_key[row][col]

    def get_answer_at(self, row: int, col: int) -> int:
        return self._answer_key[row][col]

    def get_current_at(self, row: int, col: int) -> int:
        return self._board[row][col]

    def copy_grid(self) -> Grid:
        return copy_grid(self._board)

    def answer_grid(self) -> Grid:
        return copy_grid(self._answer_key)

    def _check_move(self, row: int, col: int, value: int) -> None:
        if not self.layout.in_bounds(row, col):
            raise InvalidMove(
                f"Cell r{row} c{col} is outside the {self.rows}x{self.cols} board."
            )
        if not 0 <= value <= self.layout.size:
            raise InvalidMove(f"Value must be 0-{self.layout.size}, got {value}.")

    def _matches_answer(self) -> bool:
        return self._board == self._answer_key
