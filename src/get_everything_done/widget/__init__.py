"""Terminal display for the task board."""

from get_everything_done.widget.console_view import ConsoleView, ViewState

__all__ = [
    "ConsoleView",
    "ViewState",
]
