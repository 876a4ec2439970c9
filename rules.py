from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, List, Optional, Sequence, Tuple

from errors import InvalidConfiguration

Cell = Tuple[int, int]
Grid = List[List[int]]

ROW = "row"
COLUMN = "column"
BOX = "box"
ALL_AXES: Tuple[str, ...] = (ROW, COLUMN, BOX)


@dataclass(frozen=True)
class BoxLayout:
    rows: int
    cols: int
    box_width: int
    box_height: int

    @classmethod
    def create(
        cls, rows: int, cols: int, box_width: int, box_height: int
    ) -> "BoxLayout":
        layout = cls(rows, cols, box_width, box_height)
        layout.validate()
        return layout

    def validate(self) -> None:
        dims = (self.rows, self.cols, self.box_width, self.box_height)
        if any(d <= 0 for d in dims):
            raise InvalidConfiguration(f"Dimensions must be positive, got {dims}.")
        if self.cols % self.box_width:
            raise InvalidConfiguration(
                f"Box width {self.box_width} does not divide {self.cols} columns."
            )
        if self.rows % self.box_height:
            raise InvalidConfiguration(
                f"Box height {self.box_height} does not divide {self.rows} rows."
            )
        if self.rows != self.cols or self.box_width * self.box_height != self.rows:
            raise InvalidConfiguration(
                f"A {self.box_width}x{self.box_height} box cannot hold every symbol "
                f"of a {self.rows}x{self.cols} grid."
            )

    @property
    def size(self) -> int:
        return max(self.rows, self.cols)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def digits(self) -> range:
        return range(1, self.size + 1)

    def box_origin(self, row: int, col: int) -> Cell:
        return row - row % self.box_height, col - col % self.box_width

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cells(self) -> List[Cell]:
        return [(r, c) for r in range(self.rows) for c in range(self.cols)]


def empty_grid(layout: BoxLayout) -> Grid:
    return [[0 for _ in range(layout.cols)] for _ in range(layout.rows)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def count_filled(grid: Grid) -> int:
    return sum(1 for row in grid for val in row if val)


def conflicts(
    grid: Grid,
    layout: BoxLayout,
    row: int,
    col: int,
    value: int,
    axes: Collection[str] = ALL_AXES,
) -> bool:
    """Return True if ``value`` at (row, col) repeats a digit on any of ``axes``.

    The cell itself is never compared, so a value already sitting in the cell
    does not conflict with itself.
    """
    if ROW in axes:
        for c in range(layout.cols):
            if c != col and grid[row][c] == value:
                return True
    if COLUMN in axes:
        for r in range(layout.rows):
            if r != row and grid[r][col] == value:
                return True
    if BOX in axes:
        r0, c0 = layout.box_origin(row, col)
        for r in range(r0, r0 + layout.box_height):
            for c in range(c0, c0 + layout.box_width):
                if (r != row or c != col) and grid[r][c] == value:
                    return True
    return False


def first_conflict(
    grid: Grid, layout: BoxLayout, row: int, col: int, value: int
) -> Optional[str]:
    """Row beats column beats box."""
    for axis in ALL_AXES:
        if conflicts(grid, layout, row, col, value, (axis,)):
            return axis
    return None


def is_legal(grid: Grid, layout: BoxLayout, row: int, col: int, value: int) -> bool:
    return not conflicts(grid, layout, row, col, value)


def candidates(grid: Grid, layout: BoxLayout, row: int, col: int) -> List[int]:
    return [v for v in layout.digits if is_legal(grid, layout, row, col, v)]


def build_row_units(layout: BoxLayout) -> List[List[Cell]]:
    return [[(r, c) for c in range(layout.cols)] for r in range(layout.rows)]


def build_col_units(layout: BoxLayout) -> List[List[Cell]]:
    return [[(r, c) for r in range(layout.rows)] for c in range(layout.cols)]


def build_box_units(layout: BoxLayout) -> List[List[Cell]]:
    units: List[List[Cell]] = []
    for r0 in range(0, layout.rows, layout.box_height):
        for c0 in range(0, layout.cols, layout.box_width):
            cells = []
            for dr in range(layout.box_height):
                for dc in range(layout.box_width):
                    cells.append((r0 + dr, c0 + dc))
            units.append(cells)
    return units


def all_units(layout: BoxLayout) -> List[List[Cell]]:
    units: List[List[Cell]] = []
    units.extend(build_row_units(layout))
    units.extend(build_col_units(layout))
    units.extend(build_box_units(layout))
    return units


def unit_is_complete(grid: Grid, unit: Sequence[Cell], layout: BoxLayout) -> bool:
    return sorted(grid[r][c] for r, c in unit) == list(layout.digits)


def is_complete_solution(grid: Grid, layout: BoxLayout) -> bool:
    """True if every row, column and box holds each symbol exactly once."""
    if len(grid) != layout.rows or any(len(row) != layout.cols for row in grid):
        return False
    return all(unit_is_complete(grid, unit, layout) for unit in all_units(layout))


def givens_consistent(grid: Grid, layout: BoxLayout) -> bool:
    for r, c in layout.cells():
        val = grid[r][c]
        if val and conflicts(grid, layout, r, c, val):
            return False
    return True
