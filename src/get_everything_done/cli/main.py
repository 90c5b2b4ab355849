"""CLI commands for Get Everything Done using Typer."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from get_everything_done import __version__
from get_everything_done.cli.commands import CommandContext, build_registry
from get_everything_done.core.config import get_config
from get_everything_done.focus.board import TaskBoard
from get_everything_done.widget.console_view import ConsoleView

logger = logging.getLogger(__name__)

# Initialize Typer app
app = typer.Typer(
    name="get-everything-done",
    help="Focus-session task timer with escalating session lengths.",
    add_completion=False,
)

console = Console()


def setup_logging(log_level: str, log_file: Path | None = None, stream: bool = True) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = []

    if stream:
        handlers.append(logging.StreamHandler())

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    # Reduce noise from external libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def _start_line_reader(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
    """Read stdin on a daemon thread and hand lines to the event loop.

    None is queued on end of input.
    """

    def read() -> None:
        while True:
            try:
                line = input()
            except EOFError:
                loop.call_soon_threadsafe(queue.put_nowait, None)
                return
            loop.call_soon_threadsafe(queue.put_nowait, line)

    threading.Thread(target=read, name="stdin-reader", daemon=True).start()


@app.command()
def run(
    dev: bool = typer.Option(
        False,
        "--dev",
        help="Development mode: session lengths are counted in seconds",
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not print the per-second countdown",
    ),
) -> None:
    """Start an interactive focus session.

    Examples:
        get-everything-done run
        get-everything-done run --dev   # 10s sessions, +10s per completion
    """
    config = get_config()
    session_config = config.session
    if dev:
        session_config = session_config.model_copy(update={"dev_mode": True})

    setup_logging(log_level or config.log_level, config.log_file, stream=False)

    unit = "seconds" if session_config.dev_mode else "minutes"
    console.print("[green]Get Everything Done[/green]")
    console.print(
        f"  First session: {session_config.base_minutes} {unit}, "
        f"+{session_config.increment_minutes} {unit} per completed session"
    )
    console.print("  Type 'help' for commands, 'quit' to leave\n")

    async def run_session():
        board = TaskBoard.from_config(session_config)
        view = ConsoleView(board, console=console, show_ticks=not quiet)
        board.subscribe(view)
        logger.info(
            f"Session started: first {session_config.base_seconds}s, "
            f"+{session_config.increment_seconds}s per completion"
        )

        ctx = CommandContext(board=board, view=view)
        commands = build_registry()

        lines: asyncio.Queue[str | None] = asyncio.Queue()
        _start_line_reader(asyncio.get_running_loop(), lines)

        try:
            while ctx.active:
                line = await lines.get()
                if line is None:
                    break
                result = commands.handle(ctx, line)
                if result is not None:
                    console.print(result)
        finally:
            board.stop_active_task()

            summary = board.get_summary()
            console.print("\n[bold]Session Summary:[/bold]")
            console.print(f"  Tasks: {summary['task_count']}")
            console.print(f"  Sessions completed: {summary['sessions_completed']}")

    try:
        asyncio.run(run_session())
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")


@app.command(name="config-show")
def config_show() -> None:
    """Show current configuration."""
    config = get_config()

    table = Table(title="Get Everything Done Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")

    # Paths
    table.add_row("[bold]Paths[/bold]", "")
    table.add_row("  Config File", str(config.config_file))
    table.add_row("  Log File", str(config.log_file))
    table.add_row("  Log Level", config.log_level)

    # Sessions
    unit = "s" if config.session.dev_mode else " min"
    table.add_row("[bold]Sessions[/bold]", "")
    table.add_row("  First Session", f"{config.session.base_minutes}{unit}")
    table.add_row("  Increment", f"{config.session.increment_minutes}{unit}")
    table.add_row("  Dev Mode", str(config.session.dev_mode))
    table.add_row("  Tick", f"{config.session.tick_seconds}s")

    console.print(table)


@app.command(name="config-init")
def config_init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the current settings."""
    config = get_config()

    if config.config_file.exists() and not force:
        console.print(f"[yellow]Config already exists: {config.config_file}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    config.save()
    console.print(f"[green]Wrote {config.config_file}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Get Everything Done v{__version__}")


@app.callback()
def main_callback() -> None:
    """Get Everything Done - focus-session task timer."""
    pass


if __name__ == "__main__":
    app()
