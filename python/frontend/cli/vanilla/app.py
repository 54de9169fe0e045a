"""Vanilla terminal frontend — no third-party rendering.

Uses only print, ANSI codes and the shared key reader. Includes a menu for
size selection before each puzzle.
"""

from __future__ import annotations

import sys

from backend.config import MENU_SIZES, SIZE_LABELS, Settings
from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import GameSnapshot, GameStatus
from backend.telemetry import NullReporter, Outcome, TelemetryReporter
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.cli.session import TICK_SECONDS, PlaySession, format_time

# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"
_BOLD = "\033[1m"
_R = "\033[0m"
_BG_SEL = "\033[44;37m"  # blue bg, white fg (selected size)

_OUTCOME_COLOURS = {
    Outcome.SUBMITTED: _G,
    Outcome.RATE_LIMITED: _Y,
    Outcome.FAILED: _RED,
}


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _stats_line(snap: GameSnapshot) -> str:
    return (
        f"  Moves: {_Y}{snap.moves}{_R}  |  "
        f"Time: {_Y}{format_time(snap.elapsed_ms)}{_R}"
    )


# -- board rendering ----------------------------------------------------------


def _render_board(snap: GameSnapshot, sliding: frozenset[int]) -> str:
    """Return an ANSI-coloured text grid; tiles are labelled ``id + 1``."""
    width = len(str(snap.size * snap.size - 1))
    sep = "+" + (("-" * (width + 2) + "+") * snap.size)
    by_id = {t.id: t for t in snap.tiles}

    lines: list[str] = [sep]
    for row in snap.grid():
        cells: list[str] = []
        for tile_id in row:
            if tile_id is None:
                cells.append(f"{_DIM} {'·':>{width}} {_R}")
                continue
            label = f" {tile_id + 1:>{width}} "
            if tile_id in sliding:
                cells.append(f"{_BOLD}{label}{_R}")
            elif by_id[tile_id].is_correct:
                cells.append(f"{_G}{label}{_R}")
            elif tile_id in snap.movable_tile_ids:
                cells.append(f"{_C}{label}{_R}")
            else:
                cells.append(label)
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


def _render_log(session: PlaySession) -> str:
    if not session.reporter.enabled:
        return f"  {_DIM}Telemetry: {session.reporter.reason}{_R}"
    entries = session.telemetry_entries()
    if not entries:
        return f"  {_DIM}Telemetry: no submissions yet.{_R}"
    lines = [f"  {_BOLD}Telemetry log{_R}"]
    for e in entries:
        colour = _OUTCOME_COLOURS[e.outcome]
        ref = f" {_DIM}{e.submission_id}{_R}" if e.submission_id else ""
        lines.append(
            f"  {_DIM}{e.logged_at:%H:%M:%S}{_R} {e.action:<8} "
            f"{colour}{e.outcome}{_R} {e.message}{ref}"
        )
    return "\n".join(lines)


# -- screens ------------------------------------------------------------------


def _show_menu(sel_size: int) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}   A V A I L   S L I D I N G   P U Z Z L E   {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()

    sizes_str = ""
    for s in MENU_SIZES:
        text = f"{s}×{s} {SIZE_LABELS[s]}"
        if s == sel_size:
            sizes_str += f"  {_BG_SEL} {text} {_R}"
        else:
            sizes_str += f"  {_DIM}{text}{_R}"
    print(f"    Size:{sizes_str}")
    print(f"    {_DIM}← → to change{_R}")
    print()
    print(f"    {_C}Enter{_R}  Play {sel_size}×{sel_size}")
    print(f"    {_DIM}Q{_R}      Quit")
    print()
    print(f"  {_DIM}Shuffle to start, then slide tiles next to the empty slot.{_R}")


def _show_game(session: PlaySession) -> None:
    """Draw the full game screen.

    The stats line is printed last with no trailing newline so
    ``_update_time`` can overwrite it in-place.
    """
    snap = session.snapshot
    _clear()
    colour = _G if snap.is_complete else _C
    print(f"  {colour}=== Avail Sliding Puzzle ({snap.size}×{snap.size}) ==={_R}")
    print()
    print(_render_board(snap, session.game.interaction.sliding_tile_ids))
    print()

    shuffle_label = "shuffle again" if snap.is_shuffled else "start game"
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}X{_R}: {shuffle_label}  |  "
        f"{_C}R{_R}: reset  |  "
        f"{_C}T{_R}: telemetry  |  "
        f"{_C}Q{_R}: back"
    )
    if snap.status is GameStatus.COMPLETE:
        print(f"\n  {_G}★ CONGRATULATIONS! You solved it! ★{_R}")
    elif snap.status is GameStatus.IDLE:
        print(f"\n  {_DIM}Press X to shuffle and start the clock.{_R}")
    if session.status:
        print(f"  {session.status}")
    if session.show_log:
        print()
        print(_render_log(session))
    sys.stdout.write(f"\n{_stats_line(snap)}")
    sys.stdout.flush()


def _update_time(session: PlaySession) -> None:
    sys.stdout.write(f"\r\033[K{_stats_line(session.snapshot)}")
    sys.stdout.flush()


# -- loops --------------------------------------------------------------------


def _play(
    size: int,
    settings: Settings,
    reporter: TelemetryReporter | NullReporter,
) -> None:
    game = GamePlay(size, reporter=reporter, shuffle_moves=settings.shuffle_moves)
    session = PlaySession(game, reporter)
    redraw = True

    while True:
        if redraw:
            _show_game(session)

        key = get_key_timeout(TICK_SECONDS)
        if key is None:
            redraw = session.tick()
            if not redraw:
                _update_time(session)
            continue

        if not session.handle(key):
            return
        redraw = True


def _menu_loop(settings: Settings, reporter: TelemetryReporter | NullReporter) -> None:
    sel_size = settings.puzzle_size if settings.puzzle_size in MENU_SIZES else MENU_SIZES[0]

    while True:
        _show_menu(sel_size)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        if key == "left":
            sel_size = MENU_SIZES[max(0, MENU_SIZES.index(sel_size) - 1)]
        elif key == "right":
            sel_size = MENU_SIZES[min(len(MENU_SIZES) - 1, MENU_SIZES.index(sel_size) + 1)]
        elif key in ("enter", "1", "shuffle"):
            _play(sel_size, settings, reporter)


# -- public entry point -------------------------------------------------------


def run(
    settings: Settings,
    reporter: TelemetryReporter | NullReporter,
    size: int | None = None,
) -> None:
    """Launch the vanilla CLI; with *size* go straight to the puzzle."""
    if size is not None:
        _play(size, settings, reporter)
        return
    _menu_loop(settings, reporter)
