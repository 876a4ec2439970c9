from __future__ import annotations


class PuzzleError(Exception):
    pass


class InvalidConfiguration(PuzzleError, ValueError):
    """Grid and box dimensions do not partition the board."""


class GenerationFailed(PuzzleError, RuntimeError):
    """The backtracking search ran out of options without a full grid."""


class InvalidMove(PuzzleError, ValueError):
    """Coordinates or value outside the board, or an edit to a locked cell."""
