"""Terminal key dispatch and clock ticking."""

from __future__ import annotations

import random

from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import GameStatus
from frontend.cli.session import PlaySession, format_time
from tests.conftest import FakeClock


def _session(clock: FakeClock) -> PlaySession:
    return PlaySession(GamePlay(3, rng=random.Random(5), clock=clock))


def test_format_time() -> None:
    assert format_time(0) == "00:00"
    assert format_time(61_999) == "01:01"
    assert format_time(3_600_000) == "60:00"


def test_shuffle_and_reset_keys(clock: FakeClock) -> None:
    session = _session(clock)
    assert session.handle("shuffle")
    assert session.snapshot.status is GameStatus.IN_PROGRESS

    assert session.handle("reset")
    assert session.snapshot.status is GameStatus.IDLE
    assert session.snapshot.moves == 0


def test_enter_starts_but_does_not_reshuffle(clock: FakeClock) -> None:
    session = _session(clock)
    session.handle("enter")
    generation = session.game.generation
    session.handle("enter")
    assert session.game.generation == generation


def test_arrow_keys_move_tiles(clock: FakeClock) -> None:
    session = _session(clock)
    session.handle("shuffle")
    for key in ("up", "down", "left", "right"):
        assert session.handle(key)
    # The empty slot always has a neighbour in one of the four directions.
    assert session.snapshot.moves >= 1


def test_tick_settles_slides_and_advances_clock(clock: FakeClock) -> None:
    session = _session(clock)
    session.handle("shuffle")
    session.game.attempt_move(min(session.game.movable_tile_ids))
    assert session.game.interaction.pending_slides()

    clock.advance(2)
    assert session.tick()
    assert session.game.interaction.pending_slides() == []
    assert session.snapshot.elapsed_ms == 2000

    clock.advance(1)
    assert not session.tick()
    assert session.snapshot.elapsed_ms == 3000


def test_reset_stops_the_clock(clock: FakeClock) -> None:
    session = _session(clock)
    session.handle("shuffle")
    session.handle("reset")
    clock.advance(5)
    session.tick()
    assert session.snapshot.elapsed_ms == 0


def test_quit_unsubscribes(clock: FakeClock) -> None:
    session = _session(clock)
    assert not session.handle("quit")
    session.game.shuffle()
    assert session.snapshot.status is GameStatus.IDLE


def test_telemetry_toggle(clock: FakeClock) -> None:
    session = _session(clock)
    session.handle("telemetry")
    assert session.show_log
    assert session.telemetry_entries() == []
    assert not session.log_changed()
    session.handle("telemetry")
    assert not session.show_log
