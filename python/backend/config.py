"""Runtime configuration: environment and ``.env`` driven settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv
from rich.logging import RichHandler

from backend.engine.gamegenerator import DEFAULT_SHUFFLE_MOVES
from backend.telemetry import (
    ConfigurationError,
    NullReporter,
    TelemetryReporter,
    TurboDAClient,
)
from backend.telemetry.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

MIN_SIZE = 2
MAX_SIZE = 8
MENU_SIZES = (3, 4, 5, 6)
SIZE_LABELS = {3: "Easy", 4: "Medium", 5: "Hard", 6: "Expert"}

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default


@dataclass(frozen=True)
class Settings:
    puzzle_size: int = 3
    shuffle_moves: int = DEFAULT_SHUFFLE_MOVES
    log_level: str = "WARNING"
    telemetry_enabled: bool = True
    turbo_da_base_url: str = DEFAULT_BASE_URL
    turbo_da_api_key: str | None = None
    turbo_da_timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, dotenv_path: Path | None = None) -> Settings:
        """Read settings from the environment after loading ``.env``."""
        load_dotenv(dotenv_path=dotenv_path)

        size = _env_int("PUZZLE_SIZE", cls.puzzle_size)
        if not MIN_SIZE <= size <= MAX_SIZE:
            logger.warning("PUZZLE_SIZE=%d out of range; using %d", size, cls.puzzle_size)
            size = cls.puzzle_size

        return cls(
            puzzle_size=size,
            shuffle_moves=max(0, _env_int("SHUFFLE_MOVES", cls.shuffle_moves)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            telemetry_enabled=os.getenv("TURBO_DA_ENABLED", "true").strip().lower() in _TRUTHY,
            turbo_da_base_url=os.getenv("TURBO_DA_BASE_URL") or DEFAULT_BASE_URL,
            turbo_da_api_key=os.getenv("TURBODA_API_KEY") or None,
            turbo_da_timeout=_env_float("TURBO_DA_TIMEOUT", DEFAULT_TIMEOUT),
        )

    def with_overrides(self, **changes) -> Settings:
        """Return a copy with the non-``None`` values in *changes* applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def configure_logging(level: str = "WARNING") -> None:
    """Route all log records through Rich; call once at startup."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_reporter(settings: Settings) -> TelemetryReporter | NullReporter:
    """Build the telemetry reporter, degrading to ``NullReporter`` when unusable."""
    if not settings.telemetry_enabled:
        return NullReporter("Telemetry disabled")
    try:
        client = TurboDAClient(
            api_key=settings.turbo_da_api_key,
            base_url=settings.turbo_da_base_url,
            timeout=settings.turbo_da_timeout,
        )
    except ConfigurationError as exc:
        logger.warning("Telemetry off: %s", exc)
        return NullReporter(str(exc))
    return TelemetryReporter(client)
