"""Errors reported to the UI layer.

Both are recoverable: they are raised before any state is touched, so the
registry and the session engine are unchanged when a caller sees one.
"""

from __future__ import annotations


class GetEverythingDoneError(Exception):
    """Base class for all user-facing errors."""


class InvalidInput(GetEverythingDoneError, ValueError):
    """Rejected user input, e.g. an empty task title."""


class NotFound(GetEverythingDoneError, KeyError):
    """An operation referenced a task id that is not in the registry."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task #{task_id} not found.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])
