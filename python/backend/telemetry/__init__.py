from backend.telemetry.client import TurboDAClient
from backend.telemetry.errors import (
    ConfigurationError,
    RateLimitError,
    TelemetryError,
    TurboDAError,
)
from backend.telemetry.models import (
    StatusDisplay,
    SubmissionInfo,
    SubmissionResponse,
    SubmissionStatus,
    TelemetryEvent,
    get_submission_status,
)
from backend.telemetry.reporter import (
    NullReporter,
    Outcome,
    TelemetryLogEntry,
    TelemetryReporter,
)

__all__ = [
    "ConfigurationError",
    "NullReporter",
    "Outcome",
    "RateLimitError",
    "StatusDisplay",
    "SubmissionInfo",
    "SubmissionResponse",
    "SubmissionStatus",
    "TelemetryError",
    "TelemetryEvent",
    "TelemetryLogEntry",
    "TelemetryReporter",
    "TurboDAClient",
    "TurboDAError",
    "get_submission_status",
]
