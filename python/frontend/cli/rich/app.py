"""Rich terminal frontend — tables, colours and panels.

Uses the ``rich`` library for styled output while sharing the key reader
and ``PlaySession`` with the vanilla CLI.
"""

from __future__ import annotations

import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import MENU_SIZES, SIZE_LABELS, Settings
from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import GameSnapshot, GameStatus
from backend.telemetry import NullReporter, Outcome, TelemetryReporter
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.cli.session import TICK_SECONDS, PlaySession, format_time

console = Console()

_OUTCOME_STYLES = {
    Outcome.SUBMITTED: "green",
    Outcome.RATE_LIMITED: "yellow",
    Outcome.FAILED: "red",
}


# -- rendering ----------------------------------------------------------------


def _render_board(snap: GameSnapshot, sliding: frozenset[int]) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(snap.size * snap.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(snap.size):
        table.add_column(width=width + 1, justify="center")

    by_id = {t.id: t for t in snap.tiles}
    for row in snap.grid():
        cells: list[str] = []
        for tile_id in row:
            if tile_id is None:
                cells.append("[dim]·[/dim]")
                continue
            label = f"{tile_id + 1:>{width}}"
            if tile_id in sliding:
                cells.append(f"[reverse bold]{label}[/reverse bold]")
            elif by_id[tile_id].is_correct:
                cells.append(f"[bold green]{label}[/bold green]")
            elif tile_id in snap.movable_tile_ids:
                cells.append(f"[bold cyan]{label}[/bold cyan]")
            else:
                cells.append(f"[bold white]{label}[/bold white]")
        table.add_row(*cells)

    return table


def _stats_text(snap: GameSnapshot) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(snap.moves), style="bold #3CA3FC")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(snap.elapsed_ms), style="bold #5FD39C")
    return stats


def _render_log(session: PlaySession) -> Table | Text:
    if not session.reporter.enabled:
        return Text(f"Telemetry: {session.reporter.reason}", style="dim")
    entries = session.telemetry_entries()
    if not entries:
        return Text("Telemetry: no submissions yet.", style="dim")

    table = Table(
        title="Telemetry",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("Time", style="dim")
    table.add_column("Event")
    table.add_column("Outcome")
    table.add_column("Detail", overflow="fold")
    for e in entries:
        style = _OUTCOME_STYLES[e.outcome]
        table.add_row(
            f"{e.logged_at:%H:%M:%S}",
            e.action,
            f"[{style}]{e.outcome}[/{style}]",
            e.submission_id or e.message,
        )
    return table


# -- screens ------------------------------------------------------------------


def _draw_menu(sel_size: int) -> None:
    console.clear()

    sizes = Text()
    for s in MENU_SIZES:
        if s != MENU_SIZES[0]:
            sizes.append("  ")
        text = f" {s}×{s} {SIZE_LABELS[s]} "
        if s == sel_size:
            sizes.append(text, style="bold white on #2677c8")
        else:
            sizes.append(text, style="dim")

    nav = Text("  ← →  change size", style="dim")

    how_to = Text()
    how_to.append("How to play\n", style="bold #3CA3FC")
    how_to.append("• Press X to shuffle the puzzle and start the clock\n")
    how_to.append("• Slide tiles next to the empty slot with the arrow keys\n")
    how_to.append("• Put every tile back in order in as few moves as possible")

    opts = Text()
    opts.append("  Enter", style="bold cyan")
    opts.append(f"  Start {sel_size}×{sel_size}    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(nav),
        Text(""),
        Align.center(how_to),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]A V A I L   S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_game(session: PlaySession) -> None:
    console.clear()

    snap = session.snapshot
    board_table = _render_board(snap, session.game.interaction.sliding_tile_ids)

    shuffle_label = "shuffle again" if snap.is_shuffled else "start game"
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("X", style="bold cyan")
    controls.append(f"  {shuffle_label}   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("T", style="bold cyan")
    controls.append("  telemetry   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    parts: list = [Align.center(board_table)]
    if snap.status is GameStatus.COMPLETE:
        congrats = Text()
        congrats.append("\n  ★ ", style="bold yellow")
        congrats.append("CONGRATULATIONS!", style="bold green")
        congrats.append("  You solved it!  ", style="green")
        congrats.append("★", style="bold yellow")
        parts.append(Align.center(congrats))
    elif snap.status is GameStatus.IDLE:
        parts.append(Align.center(Text("\nPress X to shuffle and start the clock.", style="dim")))

    border = "bold green" if snap.is_complete else "bright_blue"
    panel = Panel(
        Group(*parts),
        title=f"[bold cyan]Avail Sliding Puzzle  {snap.size}×{snap.size}[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if session.status:
        console.print(Align.center(Text(session.status, style="yellow")))
    console.print(Align.center(controls))
    if session.show_log:
        console.print()
        console.print(Align.center(_render_log(session)))
    # Save the cursor right before the stats line so _update_time() can
    # restore to it and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats_text(snap)))


def _update_time(session: PlaySession) -> None:
    """Repaint just the stats line from the saved cursor position."""
    sys.stdout.write("\033[u\033[K")
    sys.stdout.flush()
    console.print(Align.center(_stats_text(session.snapshot)))


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
            _draw_game(session)

        # Short timeout so the clock keeps ticking.
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
        _draw_menu(sel_size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
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
    """Launch the Rich CLI; with *size* go straight to the puzzle."""
    if size is not None:
        _play(size, settings, reporter)
        return
    _menu_loop(settings, reporter)
