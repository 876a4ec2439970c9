from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from rules import BoxLayout, Cell, Grid, copy_grid, givens_consistent, is_legal

logger = logging.getLogger(__name__)


@dataclass
class SolverResult:
    status: str
    solution: Optional[Grid]
    duration_ms: int
    solutions_found: int = 0
    message: str = ""


class UniquenessSolver:
    """Counts completions of a partial grid, stopping as soon as a limit is hit.

    Cells are visited in row-major order and digits tried in ascending order.
    The count is threaded through the recursion, so one instance can be
    reused for any number of grids of the same layout.
    """

    def __init__(self, layout: BoxLayout) -> None:
        self.layout = layout

    def has_unique_solution(self, grid: Grid) -> bool:
        return self.count_solutions(grid, limit=2) == 1

    def count_solutions(self, grid: Grid, limit: int = 2) -> int:
        board = copy_grid(grid)
        if not givens_consistent(board, self.layout):
            return 0
        return self._count(board, 0, limit, None)

    def solve(self, grid: Grid) -> SolverResult:
        start = time.time()
        board = copy_grid(grid)
        if not givens_consistent(board, self.layout):
            return SolverResult(
                status="no-solution",
                solution=None,
                duration_ms=int((time.time() - start) * 1000),
                message="Contradiction in givens.",
            )
        solutions: List[Grid] = []
        found = self._count(board, 0, 2, solutions)
        duration_ms = int((time.time() - start) * 1000)
        logger.debug("Solver finished in %d ms; solutions found %d", duration_ms, found)
        if not found:
            return SolverResult(
                status="no-solution",
                solution=None,
                duration_ms=duration_ms,
                message="No solution found.",
            )
        if found > 1:
            return SolverResult(
                status="multiple",
                solution=solutions[0],
                duration_ms=duration_ms,
                solutions_found=found,
                message="Multiple solutions exist.",
            )
        return SolverResult(
            status="solved",
            solution=solutions[0],
            duration_ms=duration_ms,
            solutions_found=found,
            message="Solved successfully.",
        )

    def _count(
        self,
        board: Grid,
        found: int,
        limit: int,
        solutions: Optional[List[Grid]],
    ) -> int:
        if found >= limit:
            return found
        cell = self._find_empty(board)
        if cell is None:
            if solutions is not None:
                solutions.append(copy_grid(board))
            return found + 1
        row, col = cell
        for val in self.layout.digits:
            if is_legal(board, self.layout, row, col, val):
                board[row][col] = val
                found = self._count(board, found, limit, solutions)
                board[row][col] = 0
                if found >= limit:
                    break
        return found

    def _find_empty(self, board: Grid) -> Optional[Cell]:
        for r in range(self.layout.rows):
            for c in range(self.layout.cols):
                if board[r][c] == 0:
                    return r, c
        return None
