"""Focus tracking: task list, session engine and tick clock."""

from get_everything_done.focus.board import TaskBoard
from get_everything_done.focus.clock import AsyncTicker
from get_everything_done.focus.events import (
    ActiveTaskChanged,
    EngineStateChanged,
    EventBus,
    EventSink,
    RemainingTimeChanged,
    SessionCompleted,
    TaskListChanged,
)
from get_everything_done.focus.registry import TaskRegistry
from get_everything_done.focus.session import EngineSnapshot, EngineState, SessionDurations, SessionEngine
from get_everything_done.focus.task import Task

__all__ = [
    "TaskBoard",
    "AsyncTicker",
    "ActiveTaskChanged",
    "EngineStateChanged",
    "EventBus",
    "EventSink",
    "RemainingTimeChanged",
    "SessionCompleted",
    "TaskListChanged",
    "TaskRegistry",
    "EngineSnapshot",
    "EngineState",
    "SessionDurations",
    "SessionEngine",
    "Task",
]
