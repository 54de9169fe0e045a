"""Exceptions raised by the puzzle engine.

These are programmer-facing precondition failures. Illegal moves are not
errors (the controller simply ignores them), and telemetry failures live in
``backend.telemetry.errors``.
"""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for puzzle engine errors."""


class InvalidSizeError(PuzzleError, ValueError):
    def __init__(self, size: int) -> None:
        super().__init__(f"Puzzle size must be at least 2, got {size}.")
        self.size = size


class InvalidPositionError(PuzzleError, ValueError):
    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {size}×{size} grid."
        )
        self.row = row
        self.col = col
        self.size = size


class InvalidBoardError(PuzzleError, ValueError):
    """Tile layout does not cover the grid exactly once."""
