"""Events emitted to the UI layer and the bus that delivers them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskListChanged:
    """A task was added, removed, renamed or reordered."""
    task_ids: tuple[int, ...]


@dataclass(frozen=True)
class ActiveTaskChanged:
    """The engine picked up or released a task."""
    task_id: int | None
    remaining_seconds: int


@dataclass(frozen=True)
class RemainingTimeChanged:
    """Per-tick countdown update (or a reset of the live countdown)."""
    task_id: int
    remaining_seconds: int


@dataclass(frozen=True)
class EngineStateChanged:
    """Engine moved between idle, running and paused."""
    state: str
    task_id: int | None


@dataclass(frozen=True)
class SessionCompleted:
    """A running session reached zero."""
    task_id: int
    title: str
    completed_session_count: int
    scheduled_seconds: int


Event = Union[
    TaskListChanged,
    ActiveTaskChanged,
    RemainingTimeChanged,
    EngineStateChanged,
    SessionCompleted,
]


class EventSink(Protocol):
    """Anything that wants to observe the board (console view, tests)."""

    def handle_event(self, event: Event) -> None: ...


class EventBus:
    """Fan-out of events to subscribed sinks.

    A failing sink is logged and skipped; it never interrupts the state
    transition that produced the event.
    """

    def __init__(self) -> None:
        self._sinks: list[EventSink] = []

    def subscribe(self, sink: EventSink) -> Callable[[], None]:
        """Register a sink. Returns a callable that unsubscribes it."""
        self._sinks.append(sink)

        def unsubscribe() -> None:
            # Identity, not equality: equal sinks are still separate subscribers
            self._sinks = [s for s in self._sinks if s is not sink]

        return unsubscribe

    def emit(self, event: Event) -> None:
        for sink in list(self._sinks):
            try:
                sink.handle_event(event)
            except Exception as e:
                logger.error(f"Error in event sink {type(sink).__name__}: {e}")
