import pytest

pytest.importorskip("tkinter")

from main import build_parser, format_grid, main  # noqa: E402


def test_format_grid_draws_box_borders():
    grid = [
        [1, 2, 3, 4, 5, 6],
        [4, 5, 6, 1, 2, 3],
        [0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0],
    ]
    lines = format_grid(grid, box_width=3, box_height=2).splitlines()
    assert lines[0] == "1 2 3 | 4 5 6"
    assert lines[2] == "-" * len(lines[0])
    assert lines[3] == ". . . | . . ."
    assert len(lines) == 8


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.mode == "normal"
    assert args.clues is None
    assert not args.print_only


def test_print_mode_outputs_puzzle(capsys, monkeypatch):
    monkeypatch.delenv("SUDOKU_CLUES", raising=False)
    assert main(["--print", "--mode", "easy", "--seed", "4", "--clues", "20"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 8
    assert sum(ch.isdigit() for line in out for ch in line) >= 20


def test_bad_clue_env_is_reported(capsys, monkeypatch):
    monkeypatch.setenv("SUDOKU_CLUES", "lots")
    assert main(["--print", "--mode", "easy"]) == 2
    assert "SUDOKU_CLUES" in capsys.readouterr().err
