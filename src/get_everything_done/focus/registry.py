"""Ordered task storage."""

from __future__ import annotations

import logging
from itertools import count
from typing import Iterator

from get_everything_done.focus.task import Task, clean_title

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Ordered collection of tasks; insertion order is display order.

    The registry has no timing logic. New tasks get ``initial_seconds`` as
    their remaining time, which the owner sets to the base session length.
    """

    def __init__(self, initial_seconds: int):
        self.initial_seconds = int(initial_seconds)
        self._tasks: list[Task] = []
        self._ids = count(1)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the tasks in display order."""
        return list(self._tasks)

    @property
    def task_ids(self) -> tuple[int, ...]:
        return tuple(t.id for t in self._tasks)

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def index_of(self, task: Task) -> int | None:
        for i, t in enumerate(self._tasks):
            if t is task:
                return i
        return None

    def add(self, title: str) -> Task:
        task = Task(
            id=next(self._ids),
            title=clean_title(title),
            remaining_seconds=self.initial_seconds,
        )
        self._tasks.append(task)
        logger.debug(f"Added task #{task.id}: {task.title}")
        return task

    def remove(self, task: Task) -> bool:
        """Remove ``task``. Returns False if it was not in the registry."""
        index = self.index_of(task)
        if index is None:
            return False
        del self._tasks[index]
        logger.debug(f"Removed task #{task.id}: {task.title}")
        return True

    def move_up(self, index: int) -> int:
        """Swap the task at ``index`` with the one above it.

        Returns the index the item now occupies, so the caller's selection
        can follow it. At the top this is a no-op.
        """
        if index <= 0 or index >= len(self._tasks):
            return index
        self._swap(index, index - 1)
        return index - 1

    def move_down(self, index: int) -> int:
        """Mirror of :meth:`move_up`; a no-op at the bottom."""
        if index < 0 or index >= len(self._tasks) - 1:
            return index
        self._swap(index, index + 1)
        return index + 1

    def _swap(self, a: int, b: int) -> None:
        self._tasks[a], self._tasks[b] = self._tasks[b], self._tasks[a]
