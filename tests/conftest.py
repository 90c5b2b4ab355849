# tests/conftest.py

from __future__ import annotations

import pytest

from get_everything_done.focus.board import TaskBoard
from get_everything_done.focus.events import EventBus
from get_everything_done.focus.session import SessionDurations, SessionEngine

from .fakes import FakeTicker, RecordingSink


@pytest.fixture()
def durations() -> SessionDurations:
    """base=10s, increment=10s: small numbers so tests can tick a whole session."""
    return SessionDurations(base_seconds=10, increment_seconds=10)


@pytest.fixture()
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def engine(durations: SessionDurations, ticker: FakeTicker, sink: RecordingSink) -> SessionEngine:
    bus = EventBus()
    bus.subscribe(sink)
    return SessionEngine(durations, events=bus, ticker=ticker)


@pytest.fixture()
def board(durations: SessionDurations, ticker: FakeTicker, sink: RecordingSink) -> TaskBoard:
    """
    TaskBoard wired with a fake ticker and a recording sink.
    """
    b = TaskBoard(durations, ticker=ticker)
    b.subscribe(sink)
    return b
