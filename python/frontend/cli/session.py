"""Key dispatch shared by the terminal frontends.

A ``PlaySession`` turns normalised key actions (see ``input_handler``) into
controller calls and runs the periodic clock tick. It subscribes to the
controller and keeps the latest published ``GameSnapshot``; renderers only
ever read that snapshot.
"""

from __future__ import annotations

from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import GameSnapshot, GameStatus
from backend.models.board import Direction
from backend.telemetry import NullReporter, TelemetryLogEntry, TelemetryReporter

_DIRECTIONS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

TICK_SECONDS = 0.5


def format_time(ms: int) -> str:
    m, s = divmod(ms // 1000, 60)
    return f"{m:02d}:{s:02d}"


class PlaySession:
    """One sitting at a puzzle of a fixed size."""

    def __init__(
        self,
        game: GamePlay,
        reporter: TelemetryReporter | NullReporter | None = None,
    ) -> None:
        self.game = game
        self.reporter = reporter or NullReporter()
        self.show_log = False
        self.status = ""
        self.snapshot: GameSnapshot = game.snapshot()
        # Generation the clock was started for; ticks from an older game
        # are dropped by the controller.
        self._tick_generation = game.generation
        self._log_seen: TelemetryLogEntry | None = None
        self._unsubscribe = game.subscribe(self._on_change)

    # -- input ----------------------------------------------------------------

    def handle(self, key: str) -> bool:
        """Apply one key action. Returns False when the player leaves."""
        game = self.game
        self.status = ""

        if key in _DIRECTIONS:
            game.move(_DIRECTIONS[key])
        elif key == "shuffle" or (key == "enter" and game.status is not GameStatus.IN_PROGRESS):
            game.shuffle()
            self._tick_generation = game.generation
            self.status = "Shuffled!"
        elif key == "reset":
            game.initialize()
            self.status = "Puzzle reset."
        elif key == "telemetry":
            self.show_log = not self.show_log
        elif key == "quit":
            self.close()
            return False
        return True

    def tick(self) -> bool:
        """Advance the display clock and settle finished slide animations.

        Returns True if more than the clock changed and the screen needs a
        full redraw.
        """
        interaction = self.game.interaction
        settled = False
        for token in interaction.pending_slides():
            settled = interaction.finish_slide(token) or settled
        self.game.tick(self._tick_generation)
        return settled or self.log_changed()

    # -- telemetry log ---------------------------------------------------------

    def telemetry_entries(self, limit: int = 5) -> list[TelemetryLogEntry]:
        entries = self.reporter.entries
        self._log_seen = entries[-1] if entries else None
        return entries[-limit:]

    def log_changed(self) -> bool:
        entries = self.reporter.entries
        latest = entries[-1] if entries else None
        return self.show_log and latest is not self._log_seen

    def close(self) -> None:
        self._unsubscribe()

    # -- helpers --------------------------------------------------------------

    def _on_change(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot
