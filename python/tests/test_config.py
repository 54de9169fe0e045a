"""Settings loading and reporter construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from backend.config import Settings, build_reporter
from backend.engine.gamegenerator import DEFAULT_SHUFFLE_MOVES
from backend.telemetry import NullReporter, TelemetryReporter

_VARS = (
    "PUZZLE_SIZE",
    "SHUFFLE_MOVES",
    "LOG_LEVEL",
    "TURBO_DA_ENABLED",
    "TURBO_DA_BASE_URL",
    "TURBODA_API_KEY",
    "TURBO_DA_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so teardown removes anything load_dotenv adds.
    for name in _VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


def test_defaults(tmp_path: Path) -> None:
    settings = Settings.from_env(tmp_path / ".env")
    assert settings.puzzle_size == 3
    assert settings.shuffle_moves == DEFAULT_SHUFFLE_MOVES
    assert settings.telemetry_enabled
    assert settings.turbo_da_api_key is None
    assert settings.turbo_da_base_url.startswith("https://")


def test_environment_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PUZZLE_SIZE", "5")
    monkeypatch.setenv("SHUFFLE_MOVES", "250")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("TURBO_DA_ENABLED", "no")
    monkeypatch.setenv("TURBODA_API_KEY", "k")
    monkeypatch.setenv("TURBO_DA_TIMEOUT", "2.5")

    settings = Settings.from_env(tmp_path / ".env")

    assert settings.puzzle_size == 5
    assert settings.shuffle_moves == 250
    assert settings.log_level == "DEBUG"
    assert not settings.telemetry_enabled
    assert settings.turbo_da_api_key == "k"
    assert settings.turbo_da_timeout == 2.5


def test_dotenv_file_is_loaded(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("PUZZLE_SIZE=4\nTURBODA_API_KEY=from-file\n")
    settings = Settings.from_env(env_file)
    assert settings.puzzle_size == 4
    assert settings.turbo_da_api_key == "from-file"


@pytest.mark.parametrize("raw", ["1", "42", "big"])
def test_bad_size_falls_back(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, raw: str) -> None:
    monkeypatch.setenv("PUZZLE_SIZE", raw)
    assert Settings.from_env(tmp_path / ".env").puzzle_size == 3


def test_overrides_skip_none() -> None:
    settings = Settings(log_level="INFO").with_overrides(log_level=None, telemetry_enabled=False)
    assert settings.log_level == "INFO"
    assert not settings.telemetry_enabled


def test_reporter_disabled() -> None:
    reporter = build_reporter(Settings(telemetry_enabled=False, turbo_da_api_key="k"))
    assert isinstance(reporter, NullReporter)


def test_reporter_without_key_degrades() -> None:
    reporter = build_reporter(Settings(turbo_da_api_key=None))
    assert isinstance(reporter, NullReporter)
    assert "TURBODA_API_KEY" in reporter.reason


def test_reporter_with_key() -> None:
    reporter = build_reporter(Settings(turbo_da_api_key="k"))
    try:
        assert isinstance(reporter, TelemetryReporter)
        assert reporter.enabled
    finally:
        reporter.close()
