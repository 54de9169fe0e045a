#!/usr/bin/env python3
"""Avail Sliding Puzzle.

Usage::

    python main.py                   # interactive menu
    python main.py -f rich -s 4      # Rich terminal, 4×4
    python main.py --no-telemetry    # play without Turbo DA submissions
    python main.py --status <id>     # look up a telemetry submission
"""

import importlib
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import MAX_SIZE, MIN_SIZE, Settings, build_reporter, configure_logging  # noqa: E402
from backend.telemetry import TelemetryError, TurboDAClient  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _print_status(settings: Settings, submission_id: str) -> int:
    """Print a Turbo DA submission's state. Returns the process exit code."""
    console = Console()
    try:
        client = TurboDAClient(
            api_key=settings.turbo_da_api_key,
            base_url=settings.turbo_da_base_url,
            timeout=settings.turbo_da_timeout,
        )
        info = client.get_submission_info(submission_id)
    except TelemetryError as exc:
        console.print(f"[red]Could not fetch submission {submission_id}:[/red] {exc}")
        return 1

    status = info.status
    table = Table(title=f"Submission {info.id or submission_id}", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("State", f"[{status.color}]{status.label}[/]")
    table.add_row("Block", f"{info.data.block_number} {info.data.block_hash}".strip())
    table.add_row("Transaction", f"{info.data.tx_hash} (index {info.data.tx_index})")
    table.add_row("Created", info.data.created_at)
    if info.error:
        table.add_row("Error", f"[red]{info.error}[/red]")
    console.print(table)
    return 0


def _ask_frontend() -> Frontend:
    print()
    print("  ====================================")
    print("    A V A I L   S L I D I N G   P U Z Z L E")
    print("  ====================================")
    print()
    print("  1.  Play  (Vanilla Terminal)")
    print("  2.  Play  (Rich Terminal)")
    print()
    choice = input("  Select (default 2): ").strip() or "2"
    return Frontend.vanilla if choice == "1" else Frontend.rich


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit to choose interactively.",
    ),
    size: Optional[int] = typer.Option(
        None, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE,
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}). Omit to pick from the menu.",
    ),
    no_telemetry: bool = typer.Option(
        False, "--no-telemetry",
        help="Do not submit gameplay events to Turbo DA.",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to $LOG_LEVEL.",
    ),
    status: Optional[str] = typer.Option(
        None, "--status",
        help="Show the state of a Turbo DA submission and exit.",
    ),
) -> None:
    """Avail Sliding Puzzle."""
    settings = Settings.from_env(PROJECT_ROOT / ".env").with_overrides(
        log_level=log_level.upper() if log_level else None,
        telemetry_enabled=False if no_telemetry else None,
    )
    configure_logging(settings.log_level)

    if status is not None:
        raise typer.Exit(code=_print_status(settings, status))

    if frontend is None:
        frontend = _ask_frontend()

    reporter = build_reporter(settings)
    try:
        mod = importlib.import_module(_RUNNERS[frontend])
        mod.run(settings=settings, reporter=reporter, size=size)
    finally:
        reporter.close()


if __name__ == "__main__":
    app()
