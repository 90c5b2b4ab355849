# tests/test_clock.py

from __future__ import annotations

import asyncio

import pytest

from get_everything_done.core.config import SessionConfig
from get_everything_done.focus.board import TaskBoard
from get_everything_done.focus.clock import AsyncTicker
from get_everything_done.focus.session import EngineState


@pytest.mark.asyncio
async def test_ticker_calls_back_until_stopped() -> None:
    calls = []
    ticker = AsyncTicker(lambda: calls.append(1), interval=0.01)

    ticker.start()
    assert ticker.is_running
    await asyncio.sleep(0.05)
    ticker.stop()
    seen = len(calls)
    await asyncio.sleep(0.03)

    assert seen >= 1
    assert len(calls) == seen
    assert not ticker.is_running


@pytest.mark.asyncio
async def test_ticker_start_twice_keeps_one_loop() -> None:
    calls = []
    ticker = AsyncTicker(lambda: calls.append(1), interval=0.02)

    ticker.start()
    ticker.start()
    await asyncio.sleep(0.05)
    ticker.stop()

    # one loop at 20ms cadence cannot produce more than ~2-3 ticks in 50ms
    assert len(calls) <= 3


@pytest.mark.asyncio
async def test_ticker_survives_callback_errors() -> None:
    calls = []

    def flaky() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first tick fails")

    ticker = AsyncTicker(flaky, interval=0.01)
    ticker.start()
    await asyncio.sleep(0.05)
    ticker.stop()

    assert len(calls) >= 2


@pytest.mark.asyncio
async def test_board_from_config_runs_session_to_completion() -> None:
    config = SessionConfig(base_minutes=3, increment_minutes=2, dev_mode=True, tick_seconds=0.01)
    board = TaskBoard.from_config(config)
    task = board.add_task("quick")
    assert task.remaining_seconds == 3

    board.start_task(task.id)
    for _ in range(100):
        await asyncio.sleep(0.01)
        if task.completed_session_count:
            break

    assert task.completed_session_count == 1
    assert task.remaining_seconds == 5
    assert board.snapshot().state == EngineState.IDLE
    assert not board.engine.ticker.is_running


@pytest.mark.asyncio
async def test_pause_preempts_countdown() -> None:
    config = SessionConfig(base_minutes=50, dev_mode=True, tick_seconds=0.01)
    board = TaskBoard.from_config(config)
    task = board.add_task("long")

    board.start_task(task.id)
    await asyncio.sleep(0.05)
    board.pause_active_task()
    frozen = task.remaining_seconds
    await asyncio.sleep(0.05)

    assert frozen < 50
    assert task.remaining_seconds == frozen
    assert board.snapshot().state == EngineState.PAUSED
