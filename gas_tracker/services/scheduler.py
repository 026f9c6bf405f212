"""Fixed-interval refresh scheduler."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class Scheduler:
    """Drive a refresh cycle on a fixed interval.

    Cycles run as their own tasks, separate from the timer. ``stop()``
    cancels only the timer: cycles already in flight finish and apply their
    results. Overlapping cycles are not sequenced, so under rare reordering
    a slightly older result can overwrite a newer one (freshest write wins).
    """

    def __init__(self, cycle: Callable[[], Awaitable[None]]) -> None:
        self._cycle = cycle
        self._timer: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()
        self.interval: float | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def start(self, interval: float) -> None:
        """Start ticking every ``interval`` seconds (restarts if running)."""
        if interval <= 0:
            raise ValueError("Interval must be positive")
        self.stop()
        self.interval = interval
        self._timer = asyncio.get_running_loop().create_task(self._tick(interval))
        logger.info("Auto refresh every %.1fs", interval)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.info("Auto refresh stopped")

    async def refresh_now(self) -> None:
        """Run one cycle immediately and wait for it."""
        await self.trigger()

    def trigger(self) -> asyncio.Task:
        """Start one tracked cycle without waiting for it."""
        return self._spawn()

    async def drain(self) -> None:
        """Wait for every in-flight cycle to finish."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _tick(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self._spawn()

    def _spawn(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._run_cycle())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _run_cycle(self) -> None:
        try:
            await self._cycle()
        except Exception as e:
            logger.error("Error in refresh cycle: %s", e)
