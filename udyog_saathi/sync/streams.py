"""
SyncStream - a cancellable fixed-interval task.

Each tick starts the refresh as its own task. If the task from the
previous tick is still pending, the tick is skipped; nothing is queued.
No backoff, no jitter.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from udyog_saathi.core.logging import get_logger

logger = get_logger(__name__)


class SyncStream:

    def __init__(self, name: str, interval: float, refresh: Callable[[], Awaitable[None]]):
        self.name = name
        self.interval = interval
        self.refresh = refresh
        self._loop_task: Optional[asyncio.Task] = None
        self._tick_task: Optional[asyncio.Task] = None
        self.skipped_ticks = 0

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def in_flight(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def tick(self) -> Optional[asyncio.Task]:
        """Start one refresh unless the previous one is still running."""
        if self.in_flight:
            self.skipped_ticks += 1
            logger.debug("%s tick skipped, previous refresh still running", self.name)
            return None
        self._tick_task = asyncio.create_task(self._run_refresh())
        return self._tick_task

    async def _run_refresh(self) -> None:
        try:
            await self.refresh()
        except asyncio.CancelledError:
            raise
        except Exception:
            # Background sync failures are never surfaced to the user
            logger.exception("%s refresh failed", self.name)

    async def _loop(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self.running:
            return
        self._loop_task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancel the timer and any in-flight refresh."""
        for task in (self._loop_task, self._tick_task):
            if task is not None and not task.done():
                task.cancel()
        for task in (self._loop_task, self._tick_task):
            if task is not None:
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._loop_task = None
        self._tick_task = None
