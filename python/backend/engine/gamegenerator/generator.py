"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from backend.engine.gamerules import get_adjacent_positions
from backend.errors import InvalidSizeError
from backend.models.board import Board, Position

logger = logging.getLogger(__name__)

DEFAULT_SHUFFLE_MOVES = 1000


@dataclass
class ShuffleResult:
    """Outcome of a random walk.

    ``moved_tile_ids`` is the exact sequence of tiles slid into the empty
    slot; replaying it backwards restores the starting board.
    """

    board: Board
    empty_position: Position
    moved_tile_ids: list[int]


class GameGenerator:
    """Creates solvable puzzles by walking randomly away from the solved state.

    Every step is a legal single-tile move, so the result is reachable from
    (and reducible to) the solved board without any parity check.
    """

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (tiles in order, empty slot bottom-right)."""
        if size <= 1:
            raise InvalidSizeError(size)
        return Board.solved(size)

    @staticmethod
    def shuffle(
        board: Board,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> ShuffleResult:
        """Random-walk a copy of *board*; the input board is left untouched."""
        if board.size <= 1:
            raise InvalidSizeError(board.size)
        if moves is None:
            moves = DEFAULT_SHUFFLE_MOVES
        if moves < 0:
            raise ValueError(f"Shuffle move count must be non-negative, got {moves}.")
        rng = rng or random.Random()

        walked = board.copy()
        by_position = {t.current_position: t for t in walked.tiles}
        moved: list[int] = []

        def step() -> None:
            target = rng.choice(get_adjacent_positions(walked.empty_position, walked.size))
            tile = by_position.pop(target)
            tile.current_position = walked.empty_position
            by_position[walked.empty_position] = tile
            walked.empty_position = target
            moved.append(tile.id)

        for _ in range(moves):
            step()

        # Never hand back a solved board.
        while walked.is_solved():
            step()

        logger.debug(
            "Shuffled %d×%d board with %d moves, empty slot at %s",
            walked.size, walked.size, len(moved), walked.empty_position,
        )
        return ShuffleResult(
            board=walked,
            empty_position=walked.empty_position,
            moved_tile_ids=moved,
        )

    @staticmethod
    def generate(
        size: int,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> ShuffleResult:
        """Return a random *solvable* board of the given size."""
        return GameGenerator.shuffle(GameGenerator.solved(size), moves=moves, rng=rng)
