"""Interactive commands for the ``run`` session (add, start, pause, ...)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from rich.console import RenderableType

from get_everything_done.core.errors import GetEverythingDoneError, InvalidInput
from get_everything_done.focus.board import TaskBoard
from get_everything_done.focus.task import format_seconds
from get_everything_done.widget.console_view import ConsoleView

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    board: TaskBoard
    view: ConsoleView
    active: bool = True


CommandResult = Optional[RenderableType]
CommandHandler = Callable[[CommandContext, list[str]], CommandResult]


class CommandRegistry:
    """Maps the first word of an input line to a handler."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = (usage, help_text)
        for alias in aliases or []:
            self._handlers[alias.lower()] = handler

    def handle(self, ctx: CommandContext, line: str) -> CommandResult:
        """Run one input line. User errors come back as a red message."""
        parts = line.split()
        if not parts:
            return None

        name = parts[0].lower()
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug(f"Unknown command: {line!r}")
            return f"[red]Unknown command: {name}. Type 'help' for a list.[/red]"

        # Titles keep their inner spacing
        rest = line.strip()[len(parts[0]):].strip()
        args = [rest] if name in _RAW_ARG_COMMANDS else parts[1:]
        if name == "rename" and rest:
            head, _, tail = rest.partition(" ")
            args = [head, tail.strip()]

        try:
            return handler(ctx, args)
        except GetEverythingDoneError as e:
            return f"[red]{e}[/red]"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, (usage, help_text) in self._help.items():
            cmd = f"{name} {usage}".strip()
            lines.append(f"  {cmd:<22} {help_text}")
        return "\n".join(lines)


_RAW_ARG_COMMANDS = {"add", "a"}


def _task_id(args: list[str], usage: str) -> int:
    if not args or not args[0]:
        raise InvalidInput(f"Usage: {usage}")
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        raise InvalidInput(f"Not a task id: {args[0]}") from None


def cmd_add(ctx: CommandContext, args: list[str]) -> CommandResult:
    task = ctx.board.add_task(args[0] if args else "")
    return f"[green]Added task #{task.id}: {task.title} ({task.remaining_display})[/green]"


def cmd_remove(ctx: CommandContext, args: list[str]) -> CommandResult:
    task_id = _task_id(args, "rm <id>")
    if ctx.board.registry.get(task_id) is None:
        return f"[dim]No such task: #{task_id}[/dim]"
    ctx.board.remove_task(task_id)
    return f"[yellow]Removed task #{task_id}[/yellow]"


def cmd_up(ctx: CommandContext, args: list[str]) -> CommandResult:
    ctx.board.move_task_up(_task_id(args, "up <id>"))
    return ctx.view.render_tasks()


def cmd_down(ctx: CommandContext, args: list[str]) -> CommandResult:
    ctx.board.move_task_down(_task_id(args, "down <id>"))
    return ctx.view.render_tasks()


def cmd_start(ctx: CommandContext, args: list[str]) -> CommandResult:
    ctx.board.start_task(_task_id(args, "start <id>"))
    return None


def cmd_pause(ctx: CommandContext, args: list[str]) -> CommandResult:
    snap = ctx.board.snapshot()
    ctx.board.pause_active_task()
    if snap.active_task_id is None:
        return "[dim]Nothing to pause[/dim]"
    return f"[yellow]Paused at {ctx.board.snapshot().remaining_display}[/yellow]"


def cmd_stop(ctx: CommandContext, args: list[str]) -> CommandResult:
    snap = ctx.board.snapshot()
    ctx.board.stop_active_task()
    if snap.active_task_id is None:
        return "[dim]Nothing to stop[/dim]"
    return f"[yellow]Stopped task #{snap.active_task_id} at {snap.remaining_display}[/yellow]"


def cmd_reset(ctx: CommandContext, args: list[str]) -> CommandResult:
    task_id = _task_id(args, "reset <id>")
    task = ctx.board.registry.get(task_id)
    if task is None:
        return f"[dim]No such task: #{task_id}[/dim]"
    ctx.board.reset_task(task_id)
    return f"Task #{task_id} reset to {format_seconds(task.remaining_seconds)}"


def cmd_rename(ctx: CommandContext, args: list[str]) -> CommandResult:
    task_id = _task_id(args, "rename <id> <title>")
    task = ctx.board.rename_task(task_id, args[1] if len(args) > 1 else "")
    return f"Task #{task.id} renamed to {task.title}"


def cmd_list(ctx: CommandContext, args: list[str]) -> CommandResult:
    if not ctx.board.tasks:
        return "[dim]No tasks. Add one with: add <title>[/dim]"
    return ctx.view.render_tasks()


def cmd_status(ctx: CommandContext, args: list[str]) -> CommandResult:
    return ctx.view.render_status()


def cmd_quit(ctx: CommandContext, args: list[str]) -> CommandResult:
    ctx.board.stop_active_task()
    ctx.active = False
    return None


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register("add", cmd_add, "Add a task", "<title>", aliases=["a"])
    registry.register("rm", cmd_remove, "Remove a task", "<id>", aliases=["remove"])
    registry.register("up", cmd_up, "Move a task up", "<id>")
    registry.register("down", cmd_down, "Move a task down", "<id>")
    registry.register("start", cmd_start, "Start or resume a task", "<id>", aliases=["s"])
    registry.register("pause", cmd_pause, "Pause the active task", aliases=["p"])
    registry.register("stop", cmd_stop, "Stop the active task, keeping its progress")
    registry.register("reset", cmd_reset, "Reset a task to its session length", "<id>")
    registry.register("rename", cmd_rename, "Rename a task", "<id> <title>")
    registry.register("list", cmd_list, "Show tasks", aliases=["ls"])
    registry.register("status", cmd_status, "Show session status")
    registry.register("help", lambda ctx, args: registry.build_help(), "Show this help", aliases=["?"])
    registry.register("quit", cmd_quit, "Leave the session", aliases=["exit", "q"])
    return registry
