"""Session engine: the single active countdown and its state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from get_everything_done.core.config import SessionConfig
from get_everything_done.focus.events import (
    ActiveTaskChanged,
    EngineStateChanged,
    EventBus,
    RemainingTimeChanged,
    SessionCompleted,
)
from get_everything_done.focus.task import Task, format_seconds

logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Engine-wide state; at most one task is ever active."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class SessionDurations:
    """Session length arithmetic.

    A task's next session lasts ``base + completed * increment`` seconds, so
    every completed session makes the following one longer.
    """
    base_seconds: int
    increment_seconds: int

    def __post_init__(self) -> None:
        if self.base_seconds <= 0:
            raise ValueError("base_seconds must be positive")
        if self.increment_seconds < 0:
            raise ValueError("increment_seconds cannot be negative")

    @classmethod
    def from_config(cls, config: SessionConfig) -> SessionDurations:
        return cls(base_seconds=config.base_seconds, increment_seconds=config.increment_seconds)

    def scheduled_seconds(self, completed_session_count: int) -> int:
        return self.base_seconds + completed_session_count * self.increment_seconds


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the engine for display."""
    state: EngineState
    active_task_id: int | None
    remaining_seconds: int

    @property
    def remaining_display(self) -> str:
        return format_seconds(self.remaining_seconds)


class Ticker(Protocol):
    """External one-second clock. Only ticks between start() and stop()."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


class SessionEngine:
    """Countdown state machine for at most one task at a time.

    Usage:
        engine = SessionEngine(SessionDurations(600, 600), events=bus, ticker=ticker)
        engine.start(task)   # Idle/Paused -> Running
        engine.tick()        # once per second from the ticker
        engine.pause()       # Running -> Paused, countdown frozen
        engine.stop()        # -> Idle, progress kept on the task

    Pausing and stopping keep the task's partial progress; only reset()
    and a completed session put a task back to its scheduled length.
    """

    def __init__(
        self,
        durations: SessionDurations,
        events: EventBus | None = None,
        ticker: Ticker | None = None,
    ):
        self.durations = durations
        self.events = events or EventBus()
        self.ticker = ticker

        self._state = EngineState.IDLE
        self._task: Task | None = None
        self._remaining = 0

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def active_task(self) -> Task | None:
        return self._task

    @property
    def is_running(self) -> bool:
        return self._state == EngineState.RUNNING

    @property
    def remaining_seconds(self) -> int:
        """Live countdown while a task is active, 0 when idle."""
        return self._remaining if self._task is not None else 0

    def scheduled_seconds(self, task: Task) -> int:
        return self.durations.scheduled_seconds(task.completed_session_count)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            state=self._state,
            active_task_id=self._task.id if self._task else None,
            remaining_seconds=self.remaining_seconds,
        )

    # ----- Transitions -----

    def start(self, task: Task) -> None:
        """Start or resume ``task``, interrupting any other active task."""
        if self._task is task:
            if self._state == EngineState.RUNNING:
                logger.debug(f"Task #{task.id} already running")
                return
            # Paused: resume without touching the remaining time
            self._set_state(EngineState.RUNNING)
            logger.info(f"Resumed task #{task.id} at {format_seconds(self._remaining)}")
            self.events.emit(ActiveTaskChanged(task_id=task.id, remaining_seconds=self._remaining))
            return

        if self._task is not None:
            previous = self._task
            self._persist()
            self._clear()
            logger.info(
                f"Interrupted task #{previous.id} at {previous.remaining_display} "
                f"to start task #{task.id}"
            )

        self._task = task
        if task.remaining_seconds <= 0:
            task.remaining_seconds = self.scheduled_seconds(task)
        self._remaining = task.remaining_seconds

        self._set_state(EngineState.RUNNING)
        logger.info(f"Started task #{task.id} '{task.title}' at {task.remaining_display}")
        self.events.emit(ActiveTaskChanged(task_id=task.id, remaining_seconds=self._remaining))

    def pause(self) -> None:
        """Freeze the countdown. No-op unless running."""
        if self._state != EngineState.RUNNING:
            logger.debug(f"Pause ignored while {self._state.value}")
            return
        self._set_state(EngineState.PAUSED)
        logger.info(f"Paused task #{self._task.id} at {format_seconds(self._remaining)}")

    def stop(self) -> None:
        """Release the active task, keeping its partial progress. No-op when idle."""
        if self._task is None:
            logger.debug("Stop ignored, no active task")
            return
        task = self._task
        self._persist()
        self._clear()
        logger.info(f"Stopped task #{task.id} at {task.remaining_display}")
        self.events.emit(ActiveTaskChanged(task_id=None, remaining_seconds=0))

    def reset(self, task: Task) -> None:
        """Put ``task`` back to its scheduled length. Run state is untouched."""
        task.remaining_seconds = self.scheduled_seconds(task)
        if task is self._task:
            self._remaining = task.remaining_seconds
        logger.info(f"Reset task #{task.id} to {task.remaining_display}")
        self.events.emit(RemainingTimeChanged(task_id=task.id, remaining_seconds=task.remaining_seconds))

    def release(self, task: Task) -> bool:
        """Drop ``task`` if it is active, without saving its progress.

        Used when the task is being removed. Returns True if it was active.
        """
        if task is not self._task:
            return False
        self._clear()
        logger.info(f"Released task #{task.id}")
        self.events.emit(ActiveTaskChanged(task_id=None, remaining_seconds=0))
        return True

    def tick(self) -> None:
        """Advance the countdown by one unit. No-op unless running."""
        if self._state != EngineState.RUNNING or self._task is None:
            return

        if self._remaining > 0:
            self._remaining -= 1
            self._task.remaining_seconds = self._remaining
            logger.debug(f"Tick task #{self._task.id}: {format_seconds(self._remaining)}")
            self.events.emit(
                RemainingTimeChanged(task_id=self._task.id, remaining_seconds=self._remaining)
            )

        if self._remaining <= 0:
            self._complete()

    def _complete(self) -> None:
        task = self._task
        task.completed_session_count += 1
        task.remaining_seconds = self.scheduled_seconds(task)
        self._clear()

        logger.info(
            f"Task #{task.id} '{task.title}' completed session {task.completed_session_count}; "
            f"next session {task.remaining_display}"
        )
        self.events.emit(
            SessionCompleted(
                task_id=task.id,
                title=task.title,
                completed_session_count=task.completed_session_count,
                scheduled_seconds=task.remaining_seconds,
            )
        )
        self.events.emit(ActiveTaskChanged(task_id=None, remaining_seconds=0))

    # ----- Internals -----

    def _persist(self) -> None:
        if self._task is not None:
            self._task.remaining_seconds = self._remaining

    def _clear(self) -> None:
        self._task = None
        self._remaining = 0
        self._set_state(EngineState.IDLE)

    def _set_state(self, state: EngineState) -> None:
        if state == self._state:
            return
        previous = self._state
        self._state = state

        if self.ticker is not None:
            if state == EngineState.RUNNING:
                self.ticker.start()
            elif previous == EngineState.RUNNING:
                self.ticker.stop()

        self.events.emit(
            EngineStateChanged(state=state.value, task_id=self._task.id if self._task else None)
        )

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the engine for status display."""
        return {
            "state": self._state.value,
            "active_task_id": self._task.id if self._task else None,
            "active_task": self._task.title if self._task else None,
            "time_remaining": format_seconds(self.remaining_seconds),
            "is_running": self.is_running,
        }
