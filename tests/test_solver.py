from rules import BoxLayout
from solver import UniquenessSolver

NINE = BoxLayout.create(9, 9, 3, 3)
FOUR = BoxLayout.create(4, 4, 2, 2)

PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]


def test_known_puzzle_is_unique():
    assert UniquenessSolver(NINE).has_unique_solution(PUZZLE)


def test_caller_grid_is_not_mutated():
    grid = [row[:] for row in PUZZLE]
    UniquenessSolver(NINE).has_unique_solution(grid)
    assert grid == PUZZLE


def test_full_grid_has_exactly_one_completion():
    assert UniquenessSolver(NINE).count_solutions(SOLUTION) == 1


def test_two_swappable_cells_are_not_unique():
    # Clearing a rectangle whose digits can be swapped gives two completions.
    grid = [
        [0, 2, 0, 4],
        [0, 4, 0, 2],
        [2, 1, 4, 3],
        [4, 3, 2, 1],
    ]
    solver = UniquenessSolver(FOUR)
    assert solver.count_solutions(grid) == 2
    assert not solver.has_unique_solution(grid)


def test_conflicting_givens_have_no_solution():
    grid = [row[:] for row in PUZZLE]
    grid[0][2] = 5
    solver = UniquenessSolver(NINE)
    assert solver.count_solutions(grid) == 0
    assert not solver.has_unique_solution(grid)


def test_empty_grid_counts_stop_at_limit():
    empty = [[0] * 4 for _ in range(4)]
    solver = UniquenessSolver(FOUR)
    assert solver.count_solutions(empty) == 2
    assert solver.count_solutions(empty, limit=1000) == 288
    assert not solver.has_unique_solution(empty)


def test_solver_instance_is_reusable():
    solver = UniquenessSolver(NINE)
    empty = [[0] * 9 for _ in range(9)]
    assert not solver.has_unique_solution(empty)
    assert solver.has_unique_solution(PUZZLE)


def test_solve_reports_status():
    solver = UniquenessSolver(NINE)

    result = solver.solve(PUZZLE)
    assert result.status == "solved"
    assert result.solution == SOLUTION
    assert result.solutions_found == 1

    dead = [row[:] for row in PUZZLE]
    dead[0][2] = 3
    result = solver.solve(dead)
    assert result.status == "no-solution"
    assert result.solution is None

    result = solver.solve([[0] * 9 for _ in range(9)])
    assert result.status == "multiple"
    assert result.solutions_found == 2
