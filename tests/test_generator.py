import random

import pytest

from errors import GenerationFailed, InvalidConfiguration
from generator import FullGridGenerator, generate
from rules import BoxLayout, build_box_units, is_complete_solution


@pytest.mark.parametrize(
    "dims",
    [(9, 9, 3, 3), (6, 6, 3, 2), (6, 6, 2, 3), (4, 4, 2, 2)],
)
def test_generated_grid_is_valid(dims):
    layout = BoxLayout.create(*dims)
    for seed in range(3):
        grid = FullGridGenerator(rng=random.Random(seed)).generate(layout)
        assert is_complete_solution(grid, layout)


def test_diagonal_boxes_hold_seeded_permutations():
    layout = BoxLayout.create(9, 9, 3, 3)
    gen = FullGridGenerator(rng=random.Random(7))
    board = [[0] * 9 for _ in range(9)]
    gen._fill_diagonal_boxes(board, layout)

    boxes = build_box_units(layout)
    for index in (0, 4, 8):
        assert sorted(board[r][c] for r, c in boxes[index]) == list(range(1, 10))
    for index in (1, 2, 3, 5, 6, 7):
        assert all(board[r][c] == 0 for r, c in boxes[index])


def test_diagonal_seeding_on_six_by_six_stops_at_grid_edge():
    layout = BoxLayout.create(6, 6, 3, 2)
    gen = FullGridGenerator(rng=random.Random(3))
    board = [[0] * 6 for _ in range(6)]
    gen._fill_diagonal_boxes(board, layout)
    # Boxes at (0, 0) and (2, 3); a third would start at column 6.
    filled = {(r, c) for r in range(6) for c in range(6) if board[r][c]}
    expected = {(r, c) for r in range(2) for c in range(3)}
    expected |= {(r, c) for r in range(2, 4) for c in range(3, 6)}
    assert filled == expected


def test_same_seed_same_grid():
    layout = BoxLayout.create(6, 6, 3, 2)
    first = FullGridGenerator(rng=random.Random(42)).generate(layout)
    second = FullGridGenerator(rng=random.Random(42)).generate(layout)
    assert first == second


def test_best_cell_short_circuits_on_forced_cell():
    layout = BoxLayout.create(4, 4, 2, 2)
    board = [
        [1, 2, 3, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    assert FullGridGenerator()._best_cell(board, layout) == (0, 3)


def test_best_cell_none_when_full():
    layout = BoxLayout.create(4, 4, 2, 2)
    board = [
        [1, 2, 3, 4],
        [3, 4, 1, 2],
        [2, 1, 4, 3],
        [4, 3, 2, 1],
    ]
    assert FullGridGenerator()._best_cell(board, layout) is None


class _StuckGenerator(FullGridGenerator):
    def _complete(self, board, layout):
        return False


def test_generation_failure_is_reported():
    layout = BoxLayout.create(4, 4, 2, 2)
    with pytest.raises(GenerationFailed):
        _StuckGenerator(rng=random.Random(0), max_attempts=2).generate(layout)


def test_module_generate_validates_layout():
    with pytest.raises(InvalidConfiguration):
        generate(9, 9, 2, 2)
    grid = generate(6, 6, 3, 2, rng=random.Random(5))
    assert is_complete_solution(grid, BoxLayout(6, 6, 3, 2))
