"""Asyncio tick source driving the session engine."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class AsyncTicker:
    """Calls ``callback`` every ``interval`` seconds between start() and stop().

    The callback runs on the event loop, the same loop that processes user
    intents, so a tick never interleaves with another state transition.
    stop() cancels the pending sleep; it is safe to call from inside the
    callback (e.g. when a session completes).
    """

    def __init__(self, callback: Callable[[], None], interval: float = 1.0):
        self.callback = callback
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._tick_loop())
        logger.debug("Ticker started")

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("Ticker stopped")

    async def _tick_loop(self) -> None:
        """Main tick loop."""
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Error in tick callback: {e}")
