"""Core gameplay logic — the game-state controller.

``GamePlay`` owns the authoritative state machine::

    idle ──shuffle()──▶ in_progress ──last legal move──▶ complete
      ▲                    │  ▲                              │
      └──initialize()──────┘  └──────────shuffle()───────────┘

All transitions run synchronously on the caller's thread. Subscribers get a
``GameSnapshot`` after every transition; the telemetry reporter is handed an
event on shuffle and on completion and is never waited on.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import Protocol

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay.interaction import Interaction
from backend.engine.gamerules import are_adjacent, is_puzzle_complete
from backend.engine.gamestate import GameSnapshot, GameState, GameStatus
from backend.engine.gamestate.state import Clock
from backend.errors import InvalidSizeError
from backend.models.board import Board, Direction, Position

logger = logging.getLogger(__name__)

Listener = Callable[[GameSnapshot], None]


class Reporter(Protocol):
    def report_shuffle(self, size: int) -> object: ...

    def report_completion(self, size: int, moves: int, time_ms: int) -> object: ...


# Direction is where the *tile* moves, so the tile sits on the opposite side
# of the empty slot:
# UP    → tile below the empty slot moves up
# DOWN  → tile above moves down
# LEFT  → tile to the right moves left
# RIGHT → tile to the left moves right
_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


class GamePlay:
    """Orchestrates a single puzzle session."""

    def __init__(
        self,
        size: int,
        reporter: Reporter | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
        shuffle_moves: int | None = None,
    ) -> None:
        self._reporter = reporter
        self._rng = rng or random.Random()
        self._clock = clock
        self._shuffle_moves = shuffle_moves
        self._listeners: list[Listener] = []
        self.generation = 0
        self.interaction = Interaction(self)
        self.state = self._fresh_state(size)

    @classmethod
    def from_board(
        cls,
        board: Board,
        reporter: Reporter | None = None,
        clock: Clock | None = None,
    ) -> GamePlay:
        """Start an in-progress session from an existing board (fixtures, tests)."""
        board.validate()
        game = cls(board.size, reporter=reporter, clock=clock)
        game.state.board = board.copy()
        game.state.is_shuffled = True
        game.state.status = GameStatus.IN_PROGRESS
        game.state.timer.start()
        return game

    # -- transitions ----------------------------------------------------------

    def initialize(self, size: int | None = None) -> None:
        """Return to ``idle`` with a solved board, optionally changing size."""
        size = self.size if size is None else size
        fresh = self._fresh_state(size)
        self.generation += 1
        self.interaction.reset()
        self.state = fresh
        logger.info("Initialized %d×%d puzzle", size, size)
        self._notify()

    def shuffle(self) -> None:
        """Shuffle and start the clock.

        Allowed from every state; shuffling mid-game discards progress.
        """
        self.generation += 1
        self.interaction.reset()

        result = GameGenerator.shuffle(
            GameGenerator.solved(self.size),
            moves=self._shuffle_moves,
            rng=self._rng,
        )
        state = self.state
        state.board = result.board
        state.moves = 0
        state.is_shuffled = True
        state.status = GameStatus.IN_PROGRESS
        state.displayed_elapsed_ms = 0
        state.timer.start()

        logger.info(
            "Shuffled %d×%d puzzle (%d walk steps)",
            self.size, self.size, len(result.moved_tile_ids),
        )
        self._emit("report_shuffle", self.size)
        self._notify()

    def attempt_move(self, tile_id: int) -> bool:
        """Slide tile *tile_id* into the empty slot if it is adjacent.

        Returns True if the move was applied. Moves outside ``in_progress``,
        unknown ids and non-adjacent tiles are ignored.
        """
        state = self.state
        if state.status is not GameStatus.IN_PROGRESS:
            return False

        board = state.board
        tile = board.tile_by_id(tile_id)
        if tile is None or not are_adjacent(tile.current_position, board.empty_position):
            return False

        tile.current_position, board.empty_position = (
            board.empty_position,
            tile.current_position,
        )
        state.increment_moves()
        self.interaction.start_slide(tile.id)
        logger.debug("Moved tile %d to %s (move %d)", tile.id, tile.current_position, state.moves)

        if is_puzzle_complete(board.tiles):
            state.timer.stop()
            state.displayed_elapsed_ms = state.timer.elapsed_ms
            state.status = GameStatus.COMPLETE
            logger.info(
                "Puzzle complete in %d moves, %d ms", state.moves, state.displayed_elapsed_ms
            )
            self._emit(
                "report_completion", self.size, state.moves, state.displayed_elapsed_ms
            )

        self._notify()
        return True

    def move(self, direction: Direction) -> bool:
        """Slide the tile next to the empty slot in *direction*.

        E.g. ``Direction.UP`` moves the tile **below** the empty slot upward.
        """
        dr, dc = _DIRECTION_OFFSETS[direction]
        target = self.state.board.empty_position.offset(dr, dc)
        if not target.in_bounds(self.size):
            return False
        tile = self.state.board.tile_at(target)
        if tile is None:
            return False
        return self.attempt_move(tile.id)

    def tick(self, generation: int | None = None) -> int:
        """Periodic timer tick; refreshes the displayed elapsed time.

        A tick carrying an out-of-date *generation* belongs to a game that
        has since been reset or reshuffled and is ignored.
        """
        state = self.state
        if generation is not None and generation != self.generation:
            return state.displayed_elapsed_ms
        if state.status is not GameStatus.IN_PROGRESS:
            return state.displayed_elapsed_ms

        before = state.displayed_elapsed_ms
        after = state.refresh_elapsed()
        if after != before:
            self._notify()
        return after

    # -- subscription ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot()

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.state.size

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def empty_position(self) -> Position:
        return self.state.board.empty_position

    @property
    def movable_tile_ids(self) -> frozenset[int]:
        return self.state.movable_tile_ids

    @property
    def elapsed_ms(self) -> int:
        return self.state.displayed_elapsed_ms

    @property
    def is_won(self) -> bool:
        return self.state.is_complete

    # -- helpers --------------------------------------------------------------

    def _fresh_state(self, size: int) -> GameState:
        if size <= 1:
            raise InvalidSizeError(size)
        return GameState(GameGenerator.solved(size), clock=self._clock)

    def _emit(self, method: str, *args: int) -> None:
        if self._reporter is None:
            return
        try:
            getattr(self._reporter, method)(*args)
        except Exception:
            logger.exception("Telemetry reporter failed on %s", method)

    def _notify(self) -> None:
        snapshot = self.state.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("State listener %r failed", listener)
