"""Shared fixtures: a hand-driven clock and a recording telemetry reporter."""

from __future__ import annotations

import random

import pytest


class FakeClock:
    """Callable clock returning seconds; advance it by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingReporter:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def report_shuffle(self, size: int) -> None:
        self.events.append(("shuffle", size))

    def report_completion(self, size: int, moves: int, time_ms: int) -> None:
        self.events.append(("complete", size, moves, time_ms))


class ExplodingReporter:
    def report_shuffle(self, size: int) -> None:
        raise ConnectionError("network down")

    def report_completion(self, size: int, moves: int, time_ms: int) -> None:
        raise ConnectionError("network down")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
