"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from backend.engine.gamerules import is_puzzle_complete, movable_tile_ids
from backend.models.board import Board, Position, Tile

Clock = Callable[[], float]


class GameStatus(StrEnum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class GameTimer:
    """Wall-clock stopwatch measured in milliseconds.

    *clock* returns seconds (``time.monotonic`` by default) and is injectable
    so tests can drive time by hand.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or time.monotonic
        self._start_time: float | None = None
        self._elapsed_banked: float = 0.0

    @property
    def running(self) -> bool:
        return self._start_time is not None

    @property
    def elapsed_ms(self) -> int:
        elapsed = self._elapsed_banked
        if self._start_time is not None:
            elapsed += self._clock() - self._start_time
        return int(elapsed * 1000)

    def start(self) -> None:
        self._elapsed_banked = 0.0
        self._start_time = self._clock()

    def stop(self) -> None:
        if self._start_time is not None:
            self._elapsed_banked += self._clock() - self._start_time
            self._start_time = None

    def clear(self) -> None:
        self._start_time = None
        self._elapsed_banked = 0.0


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game handed to renderers and subscribers."""

    size: int
    tiles: tuple[Tile, ...]
    empty_position: Position
    moves: int
    elapsed_ms: int
    is_complete: bool
    is_shuffled: bool
    status: GameStatus
    movable_tile_ids: frozenset[int]

    def grid(self) -> list[list[int | None]]:
        rows: list[list[int | None]] = [[None] * self.size for _ in range(self.size)]
        for tile in self.tiles:
            rows[tile.current_position.row][tile.current_position.col] = tile.id
        return rows


class GameState:
    """Holds the current board, move counter, flags and timer."""

    def __init__(self, board: Board, clock: Clock | None = None) -> None:
        self.board = board
        self.moves: int = 0
        self.is_shuffled: bool = False
        self.status: GameStatus = GameStatus.IDLE
        self.timer = GameTimer(clock)
        # Refreshed by timer ticks; frozen once the game completes.
        self.displayed_elapsed_ms: int = 0

    # -- derived --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def is_complete(self) -> bool:
        return self.status is GameStatus.COMPLETE

    @property
    def is_solved(self) -> bool:
        return is_puzzle_complete(self.board.tiles)

    @property
    def movable_tile_ids(self) -> frozenset[int]:
        if self.status is not GameStatus.IN_PROGRESS:
            return frozenset()
        return movable_tile_ids(self.board.tiles, self.board.empty_position, self.size)

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    # -- time tracking --------------------------------------------------------

    def refresh_elapsed(self) -> int:
        if self.timer.running:
            self.displayed_elapsed_ms = self.timer.elapsed_ms
        return self.displayed_elapsed_ms

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            size=self.size,
            tiles=tuple(t.copy() for t in self.board.tiles),
            empty_position=self.board.empty_position,
            moves=self.moves,
            elapsed_ms=self.displayed_elapsed_ms,
            is_complete=self.is_complete,
            is_shuffled=self.is_shuffled,
            status=self.status,
            movable_tile_ids=self.movable_tile_ids,
        )
