"""Telemetry failures.

None of these ever reach the game loop: ``TelemetryReporter`` catches them
and turns them into log entries.
"""

from __future__ import annotations


class TelemetryError(Exception):
    """Base class for telemetry errors."""


class ConfigurationError(TelemetryError):
    """Required telemetry setting (API key, base URL) is missing."""


class TurboDAError(TelemetryError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(TurboDAError):
    def __init__(self, retry_after: int) -> None:
        super().__init__(
            f"Rate limit exceeded. Please try again in {retry_after} seconds.",
            status_code=429,
        )
        self.retry_after = retry_after
