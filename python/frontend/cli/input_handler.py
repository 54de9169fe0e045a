"""Single-keypress reader for the terminal frontends.

Arrow keys, WASD and the command letters are read without waiting for
Enter, on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "x": "shuffle",
    " ": "shuffle",
    "r": "reset",
    "t": "telemetry",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def _decode(ch: str, read_next: Callable[[], str | None]) -> str:
    """Resolve *ch*, pulling the rest of an ``ESC [ X`` arrow sequence if present.

    *read_next* returns the next pending character or ``None`` if nothing
    arrives; a lone Escape means quit.
    """
    if ch != "\x1b":
        return _resolve(ch)
    ch2 = read_next()
    if ch2 != "[":
        return "quit"
    ch3 = read_next()
    return _ARROW_MAP.get(ch3 or "", "")


# -- platform readers ------------------------------------------------------------


def _get_key_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def read_one(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = read_one(timeout)
        if ch is None:
            return None
        return _decode(ch, lambda: read_one(0.1))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _get_key_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    ch = msvcrt.getch().decode("utf-8", errors="ignore")
    return _resolve(ch)


_get_key = _get_key_windows if os.name == "nt" else _get_key_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Possible return values:
        "up", "down", "left", "right"  — movement (arrows / WASD)
        "shuffle"                      — x / space
        "reset"                        — r
        "telemetry"                    — t (toggle telemetry log)
        "quit"                         — q / Ctrl-C / Escape
        "enter"                        — Enter / Return
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    key = _get_key(None)
    return key or ""


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but returns ``None`` after *timeout* seconds of silence."""
    return _get_key(timeout)
