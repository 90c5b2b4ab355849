# tests/test_commands.py

from __future__ import annotations

import pytest
from rich.console import Console
from rich.table import Table

from get_everything_done.cli.commands import CommandContext, CommandRegistry, build_registry
from get_everything_done.focus.board import TaskBoard
from get_everything_done.focus.session import EngineState
from get_everything_done.widget.console_view import ConsoleView


@pytest.fixture()
def console() -> Console:
    return Console(record=True, width=100, force_terminal=False)


@pytest.fixture()
def ctx(board: TaskBoard, console: Console) -> CommandContext:
    view = ConsoleView(board, console=console, show_ticks=False)
    board.subscribe(view)
    return CommandContext(board=board, view=view)


def test_add_keeps_title_spacing(ctx: CommandContext) -> None:
    reg = build_registry()
    out = reg.handle(ctx, "add  write   the report ")
    assert "Added task #1" in out
    assert ctx.board.tasks[0].title == "write   the report"


def test_user_errors_are_reported_not_raised(ctx: CommandContext) -> None:
    reg = build_registry()
    assert "cannot be empty" in reg.handle(ctx, "add   ")
    assert "not found" in reg.handle(ctx, "start 5")
    assert "Usage" in reg.handle(ctx, "start")
    assert "Not a task id" in reg.handle(ctx, "up abc")


def test_unknown_and_blank_lines(ctx: CommandContext) -> None:
    reg = build_registry()
    assert reg.handle(ctx, "   ") is None
    assert "Unknown command" in reg.handle(ctx, "dance")


def test_session_commands_drive_board(ctx: CommandContext) -> None:
    reg = build_registry()
    reg.handle(ctx, "add T")
    reg.handle(ctx, "start #1")
    for _ in range(4):
        ctx.board.on_tick()

    assert "00:06" in reg.handle(ctx, "pause")
    assert ctx.board.snapshot().state == EngineState.PAUSED

    reg.handle(ctx, "s 1")
    assert ctx.board.snapshot().state == EngineState.RUNNING

    assert "Stopped task #1" in reg.handle(ctx, "stop")
    assert "Nothing to stop" in reg.handle(ctx, "stop")

    assert "reset to 00:10" in reg.handle(ctx, "reset 1")


def test_rename_and_list(ctx: CommandContext) -> None:
    reg = build_registry()
    reg.handle(ctx, "add first")
    reg.handle(ctx, "add second")
    reg.handle(ctx, "rename 2 the  second one")
    assert ctx.board.tasks[1].title == "the  second one"

    assert isinstance(reg.handle(ctx, "up 2"), Table)
    assert [t.id for t in ctx.board.tasks] == [2, 1]
    assert isinstance(reg.handle(ctx, "ls"), Table)


def test_quit_stops_and_ends_loop(ctx: CommandContext) -> None:
    reg = build_registry()
    reg.handle(ctx, "add T")
    reg.handle(ctx, "start 1")
    reg.handle(ctx, "quit")

    assert ctx.active is False
    assert ctx.board.snapshot().state == EngineState.IDLE


def test_help_lists_commands(ctx: CommandContext) -> None:
    reg = build_registry()
    text = reg.handle(ctx, "help")
    for name in ("add", "start", "pause", "stop", "reset", "rename", "quit"):
        assert name in text


def test_registry_aliases() -> None:
    reg = CommandRegistry()
    reg.register("hello", lambda ctx, args: " ".join(args), "greet", aliases=["hi"])
    assert reg.handle(None, "HI there you") == "there you"


def test_remove_and_reset_report_unknown_ids(ctx: CommandContext) -> None:
    reg = build_registry()
    reg.handle(ctx, "add T")

    assert "No such task: #42" in reg.handle(ctx, "rm 42")
    assert "No such task: #42" in reg.handle(ctx, "reset 42")
    assert len(ctx.board.tasks) == 1

    assert "Removed task #1" in reg.handle(ctx, "rm 1")
    assert ctx.board.tasks == []
