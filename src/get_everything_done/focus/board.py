"""Task board: the id-based interface the UI layer talks to."""

from __future__ import annotations

import logging
from typing import Any, Callable

from get_everything_done.core.config import SessionConfig
from get_everything_done.core.errors import NotFound
from get_everything_done.focus.clock import AsyncTicker
from get_everything_done.focus.events import EventBus, EventSink, TaskListChanged
from get_everything_done.focus.registry import TaskRegistry
from get_everything_done.focus.session import EngineSnapshot, SessionDurations, SessionEngine, Ticker
from get_everything_done.focus.task import Task

logger = logging.getLogger(__name__)


class TaskBoard:
    """Coordinates the task registry and the session engine.

    This is the main interface for the UI layer. Intents come in by task id;
    state goes out as events to subscribed sinks.

    Usage:
        board = TaskBoard.from_config(config.session)
        board.subscribe(view)

        task = board.add_task("Write report")
        board.start_task(task.id)
        # ... the ticker calls board.on_tick() every second ...
        board.pause_active_task()
    """

    def __init__(self, durations: SessionDurations, ticker: Ticker | None = None):
        self.durations = durations
        self.events = EventBus()
        self.registry = TaskRegistry(initial_seconds=durations.base_seconds)
        self.engine = SessionEngine(durations, events=self.events, ticker=ticker)

    @classmethod
    def from_config(cls, config: SessionConfig) -> TaskBoard:
        """Build a board driven by an asyncio ticker at the configured cadence."""
        board = cls(SessionDurations.from_config(config))
        board.engine.ticker = AsyncTicker(board.on_tick, interval=config.tick_seconds)
        return board

    def subscribe(self, sink: EventSink) -> Callable[[], None]:
        return self.events.subscribe(sink)

    # ----- Queries -----

    @property
    def tasks(self) -> list[Task]:
        return self.registry.tasks

    def get_task(self, task_id: int) -> Task:
        task = self.registry.get(task_id)
        if task is None:
            raise NotFound(task_id)
        return task

    def snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    # ----- Task list intents -----

    def add_task(self, title: str) -> Task:
        try:
            task = self.registry.add(title)
        except ValueError:
            logger.warning(f"Rejected task title: {title!r}")
            raise
        logger.info(f"Added task #{task.id}: {task.title}")
        self._emit_list_changed()
        return task

    def remove_task(self, task_id: int) -> None:
        task = self.registry.get(task_id)
        if task is None:
            logger.debug(f"Remove ignored, task #{task_id} not found")
            return
        # Engine lets go first so it never points at a removed task
        self.engine.release(task)
        self.registry.remove(task)
        logger.info(f"Removed task #{task.id}: {task.title}")
        self._emit_list_changed()

    def move_task_up(self, task_id: int) -> int:
        """Move a task one place up. Returns its new index."""
        task = self.get_task(task_id)
        index = self.registry.index_of(task)
        new_index = self.registry.move_up(index)
        if new_index != index:
            self._emit_list_changed()
        return new_index

    def move_task_down(self, task_id: int) -> int:
        """Move a task one place down. Returns its new index."""
        task = self.get_task(task_id)
        index = self.registry.index_of(task)
        new_index = self.registry.move_down(index)
        if new_index != index:
            self._emit_list_changed()
        return new_index

    def rename_task(self, task_id: int, title: str) -> Task:
        task = self.get_task(task_id)
        task.rename(title)
        logger.info(f"Renamed task #{task.id} to {task.title}")
        self._emit_list_changed()
        return task

    # ----- Session intents -----

    def start_task(self, task_id: int) -> None:
        self.engine.start(self.get_task(task_id))

    def pause_active_task(self) -> None:
        self.engine.pause()

    def stop_active_task(self) -> None:
        self.engine.stop()

    def reset_task(self, task_id: int) -> None:
        task = self.registry.get(task_id)
        if task is None:
            logger.debug(f"Reset ignored, task #{task_id} not found")
            return
        self.engine.reset(task)

    def on_tick(self) -> None:
        self.engine.tick()

    def _emit_list_changed(self) -> None:
        self.events.emit(TaskListChanged(task_ids=self.registry.task_ids))

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the board for status display."""
        summary = self.engine.get_summary()
        summary["task_count"] = len(self.registry)
        summary["sessions_completed"] = sum(t.completed_session_count for t in self.registry)
        return summary
