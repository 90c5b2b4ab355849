"""Task entity tracked by the registry and the session engine."""

from __future__ import annotations

from dataclasses import dataclass

from get_everything_done.core.errors import InvalidInput


def format_seconds(seconds: int) -> str:
    """Format a countdown value as MM:SS."""
    minutes, seconds = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


def clean_title(title: str | None) -> str:
    """Strip a title, rejecting empty and whitespace-only input."""
    title = (title or "").strip()
    if not title:
        raise InvalidInput("Task title cannot be empty.")
    return title


@dataclass(eq=False)
class Task:
    """One trackable unit of work.

    Identity is the object itself (and its id), not its field values: two
    tasks with the same title and progress are still different tasks.
    """
    id: int
    title: str
    remaining_seconds: int
    completed_session_count: int = 0

    @property
    def remaining_display(self) -> str:
        return format_seconds(self.remaining_seconds)

    def rename(self, title: str) -> None:
        self.title = clean_title(title)
