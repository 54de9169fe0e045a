"""Telemetry payloads and Turbo DA response types."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

GAME_TYPE = "avail-sliding-puzzle"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class TelemetryEvent:
    """One gameplay event, serialised as the JSON body sent to Turbo DA."""

    action: str
    puzzle_size: int
    message: str
    timestamp: str = field(default_factory=_utc_now_iso)
    game_type: str = GAME_TYPE
    moves: int | None = None
    time_ms: int | None = None
    is_complete: bool | None = None

    @classmethod
    def shuffle(cls, size: int) -> TelemetryEvent:
        return cls(
            action="shuffle",
            puzzle_size=size,
            message=f"Started a new {size}×{size} sliding puzzle",
        )

    @classmethod
    def completion(cls, size: int, moves: int, time_ms: int) -> TelemetryEvent:
        return cls(
            action="complete",
            puzzle_size=size,
            message=f"Solved a {size}×{size} sliding puzzle in {moves} moves",
            moves=moves,
            time_ms=time_ms,
            is_complete=True,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "action": self.action,
            "puzzleSize": self.puzzle_size,
            "timestamp": self.timestamp,
            "gameType": self.game_type,
            "message": self.message,
        }
        if self.moves is not None:
            data["moves"] = self.moves
        if self.time_ms is not None:
            data["timeMs"] = self.time_ms
        if self.is_complete is not None:
            data["isComplete"] = self.is_complete
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass
class SubmissionResponse:
    submission_id: str


@dataclass
class SubmissionData:
    amount_data: str = ""
    block_hash: str = ""
    block_number: int | None = None
    created_at: str = ""
    data_billed: str = ""
    data_hash: str = ""
    fees: str = ""
    tx_hash: str = ""
    tx_index: int | None = None
    user_id: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> SubmissionData:
        raw = raw or {}
        known = {k: raw[k] for k in cls.__dataclass_fields__ if raw.get(k) is not None}
        return cls(**known)


@dataclass
class SubmissionInfo:
    id: str
    state: str
    data: SubmissionData
    error: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SubmissionInfo:
        return cls(
            id=str(raw.get("id", "")),
            state=str(raw.get("state", "")),
            data=SubmissionData.from_dict(raw.get("data")),
            error=raw.get("error"),
        )

    @property
    def status(self) -> StatusDisplay:
        return get_submission_status(self.state)


# -- status display ------------------------------------------------------------


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    FINALIZED = "finalized"
    ERROR = "error"


@dataclass(frozen=True)
class StatusDisplay:
    status: SubmissionStatus
    label: str
    color: str


_STATUS_DISPLAY: dict[SubmissionStatus, StatusDisplay] = {
    SubmissionStatus.PENDING: StatusDisplay(SubmissionStatus.PENDING, "Pending", "#44D5DE"),
    SubmissionStatus.PROCESSING: StatusDisplay(SubmissionStatus.PROCESSING, "Processing", "#EDC7FC"),
    SubmissionStatus.FINALIZED: StatusDisplay(SubmissionStatus.FINALIZED, "Finalized", "#5FD39C"),
    SubmissionStatus.ERROR: StatusDisplay(SubmissionStatus.ERROR, "Error", "#ff6b6b"),
}


def get_submission_status(state: str) -> StatusDisplay:
    """Map a raw Turbo DA state to a display status; unknown states are errors."""
    try:
        status = SubmissionStatus(state.lower())
    except ValueError:
        status = SubmissionStatus.ERROR
    return _STATUS_DISPLAY[status]
