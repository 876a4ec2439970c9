from __future__ import annotations

import logging
import random
import time
from typing import Optional

from errors import GenerationFailed
from rules import BoxLayout, Cell, Grid, candidates, empty_grid, is_legal

logger = logging.getLogger(__name__)


class FullGridGenerator:
    """Builds a random, fully populated grid.

    Diagonal boxes are seeded with shuffled digits first (they share no row,
    column or box, so no validation is needed), then the remaining cells are
    completed by backtracking on the most constrained cell (MRV).
    """

    def __init__(
        self, rng: Optional[random.Random] = None, max_attempts: int = 10
    ) -> None:
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def generate(self, layout: BoxLayout) -> Grid:
        start = time.time()
        for attempt in range(1, self.max_attempts + 1):
            board = empty_grid(layout)
            self._fill_diagonal_boxes(board, layout)
            if self._complete(board, layout):
                duration_ms = int((time.time() - start) * 1000)
                logger.debug(
                    "Generated %dx%d grid on attempt %d in %d ms",
                    layout.rows,
                    layout.cols,
                    attempt,
                    duration_ms,
                )
                return board
            logger.info("Grid completion failed on attempt %d, reseeding", attempt)
        raise GenerationFailed(
            f"No complete {layout.rows}x{layout.cols} grid found after "
            f"{self.max_attempts} attempts."
        )

    def _fill_diagonal_boxes(self, board: Grid, layout: BoxLayout) -> None:
        i = 0
        while i * layout.box_height < layout.rows and i * layout.box_width < layout.cols:
            self._fill_box(board, layout, i * layout.box_height, i * layout.box_width)
            i += 1

    def _fill_box(
        self, board: Grid, layout: BoxLayout, start_row: int, start_col: int
    ) -> None:
        numbers = list(layout.digits)
        self.rng.shuffle(numbers)
        index = 0
        for r in range(start_row, min(start_row + layout.box_height, layout.rows)):
            for c in range(start_col, min(start_col + layout.box_width, layout.cols)):
                if index < len(numbers):
                    board[r][c] = numbers[index]
                    index += 1

    def _complete(self, board: Grid, layout: BoxLayout) -> bool:
        cell = self._best_cell(board, layout)
        if cell is None:
            return True
        row, col = cell
        for val in layout.digits:
            if is_legal(board, layout, row, col, val):
                board[row][col] = val
                if self._complete(board, layout):
                    return True
                board[row][col] = 0
        return False

    def _best_cell(self, board: Grid, layout: BoxLayout) -> Optional[Cell]:
        best: Optional[Cell] = None
        min_options = layout.size + 1
        for r in range(layout.rows):
            for c in range(layout.cols):
                if board[r][c]:
                    continue
                options = len(candidates(board, layout, r, c))
                if options < min_options:
                    min_options = options
                    best = (r, c)
                if options <= 1:
                    return best
        return best


def generate(
    rows: int,
    cols: int,
    box_width: int,
    box_height: int,
    rng: Optional[random.Random] = None,
) -> Grid:
    layout = BoxLayout.create(rows, cols, box_width, box_height)
    return FullGridGenerator(rng=rng).generate(layout)
