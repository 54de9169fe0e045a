"""Fire-and-forget gameplay telemetry.

The game controller calls ``report_*`` and returns immediately. Submission
runs on a single background worker; whatever happens there (success, rate
limit, network failure) becomes a ``TelemetryLogEntry`` for display and
nothing is ever raised back into the game.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from backend.telemetry.client import TurboDAClient
from backend.telemetry.errors import RateLimitError, TelemetryError
from backend.telemetry.models import TelemetryEvent

logger = logging.getLogger(__name__)


class Outcome(StrEnum):
    SUBMITTED = "submitted"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass(frozen=True)
class TelemetryLogEntry:
    action: str
    outcome: Outcome
    message: str
    submission_id: str | None = None
    retry_after: int | None = None
    logged_at: datetime = field(default_factory=datetime.now)


class TelemetryReporter:
    """Submits ``TelemetryEvent``s in the background and keeps an outcome log."""

    def __init__(
        self,
        client: TurboDAClient,
        executor: Executor | None = None,
        max_entries: int = 50,
    ) -> None:
        self._client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="telemetry"
        )
        self._entries: deque[TelemetryLogEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return True

    @property
    def entries(self) -> list[TelemetryLogEntry]:
        """Outcome log, oldest first."""
        with self._lock:
            return list(self._entries)

    # -- reporting ------------------------------------------------------------

    def report_shuffle(self, size: int) -> Future[TelemetryLogEntry]:
        return self.submit(TelemetryEvent.shuffle(size))

    def report_completion(self, size: int, moves: int, time_ms: int) -> Future[TelemetryLogEntry]:
        return self.submit(TelemetryEvent.completion(size, moves, time_ms))

    def submit(self, event: TelemetryEvent) -> Future[TelemetryLogEntry]:
        logger.debug("Queueing telemetry event %s", event.action)
        return self._executor.submit(self._send, event)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)
        self._client.close()

    # -- worker ---------------------------------------------------------------

    def _send(self, event: TelemetryEvent) -> TelemetryLogEntry:
        try:
            response = self._client.submit_raw_data(event.to_json())
        except RateLimitError as exc:
            entry = TelemetryLogEntry(
                action=event.action,
                outcome=Outcome.RATE_LIMITED,
                message=str(exc),
                retry_after=exc.retry_after,
            )
        except TelemetryError as exc:
            entry = TelemetryLogEntry(
                action=event.action, outcome=Outcome.FAILED, message=str(exc)
            )
        except Exception as exc:
            logger.exception("Unexpected telemetry failure")
            entry = TelemetryLogEntry(
                action=event.action, outcome=Outcome.FAILED, message=f"Unexpected error: {exc}"
            )
        else:
            entry = TelemetryLogEntry(
                action=event.action,
                outcome=Outcome.SUBMITTED,
                message=f"Submitted {event.action} event",
                submission_id=response.submission_id,
            )

        logger.info("Telemetry %s: %s", entry.outcome, entry.message)
        with self._lock:
            self._entries.append(entry)
        return entry


class NullReporter:
    """Stand-in used when telemetry is disabled or not configured."""

    def __init__(self, reason: str = "Telemetry disabled") -> None:
        self.reason = reason

    @property
    def enabled(self) -> bool:
        return False

    @property
    def entries(self) -> list[TelemetryLogEntry]:
        return []

    def report_shuffle(self, size: int) -> None:
        logger.debug("%s; dropping shuffle event", self.reason)

    def report_completion(self, size: int, moves: int, time_ms: int) -> None:
        logger.debug("%s; dropping completion event", self.reason)

    def close(self) -> None:
        pass
