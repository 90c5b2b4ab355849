"""Terminal view of the task board rendered with rich.

Shows:
- Task list with completed sessions and remaining time
- Countdown status line for the active task
- Completion notification (panel + terminal bell)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from get_everything_done.focus.board import TaskBoard
from get_everything_done.focus.events import (
    ActiveTaskChanged,
    EngineStateChanged,
    Event,
    RemainingTimeChanged,
    SessionCompleted,
    TaskListChanged,
)
from get_everything_done.focus.task import format_seconds

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    """What the view currently shows."""
    state: str = "idle"
    active_task_id: int | None = None
    active_title: str = ""
    time_remaining: str = "--:--"


class ConsoleView:
    """Event sink that renders board changes to a rich console."""

    def __init__(self, board: TaskBoard, console: Console | None = None, show_ticks: bool = True):
        self.board = board
        self.console = console or Console()
        self.show_ticks = show_ticks
        self.state = ViewState()

    def handle_event(self, event: Event) -> None:
        if isinstance(event, RemainingTimeChanged):
            if event.task_id == self.state.active_task_id:
                self.state.time_remaining = format_seconds(event.remaining_seconds)
                if self.show_ticks and self.state.state == "running":
                    self.console.print(self.status_line(), end="\r", highlight=False)
        elif isinstance(event, ActiveTaskChanged):
            self._on_active_task_changed(event)
        elif isinstance(event, EngineStateChanged):
            self.state.state = event.state
        elif isinstance(event, SessionCompleted):
            self.notify_completed(event)
        elif isinstance(event, TaskListChanged):
            logger.debug(f"Task list now {list(event.task_ids)}")

    def _on_active_task_changed(self, event: ActiveTaskChanged) -> None:
        self.state.active_task_id = event.task_id
        if event.task_id is None:
            self.state.active_title = ""
            self.state.time_remaining = "--:--"
            return

        task = self.board.registry.get(event.task_id)
        self.state.active_title = task.title if task else ""
        self.state.time_remaining = format_seconds(event.remaining_seconds)
        self.console.print(
            f"[green]▶ {self.state.active_title}[/green] - {self.state.time_remaining} remaining"
        )

    def status_line(self) -> str:
        icon = {"running": "⏱", "paused": "⏸"}.get(self.state.state, "■")
        if self.state.active_task_id is None:
            return f"{icon} idle"
        return f"{icon} {self.state.time_remaining} | {self.state.active_title}    "

    def notify_completed(self, event: SessionCompleted) -> None:
        self.console.bell()
        self.console.print(Panel(
            f"[bold]{event.title}[/bold] completed session {event.completed_session_count}.\n"
            f"Next session: {format_seconds(event.scheduled_seconds)}",
            title="Session Complete",
            border_style="green",
        ))

    def render_tasks(self) -> Table:
        table = Table(title="Tasks", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right")
        table.add_column("Task")
        table.add_column("Sessions", justify="right")
        table.add_column("Remaining", justify="right")
        table.add_column("Next session", justify="right")

        snap = self.board.snapshot()
        for task in self.board.tasks:
            title = task.title
            if task.id == snap.active_task_id:
                title = f"[bold]{title}[/bold] ({snap.state.value})"
            table.add_row(
                str(task.id),
                title,
                str(task.completed_session_count),
                task.remaining_display,
                format_seconds(self.board.engine.scheduled_seconds(task)),
            )
        return table

    def render_status(self) -> Panel:
        summary = self.board.get_summary()
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="cyan")
        table.add_column("Value")

        table.add_row("State", summary["state"].upper())
        table.add_row("Active task", summary["active_task"] or "-")
        table.add_row("Remaining", summary["time_remaining"])
        table.add_row("Tasks", str(summary["task_count"]))
        table.add_row("Sessions completed", str(summary["sessions_completed"]))

        border = "green" if summary["is_running"] else "yellow"
        return Panel(table, title="Session Status", border_style=border)
