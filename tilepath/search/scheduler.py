"""Cooperative run loop that drives the search engine.

While queries are pending the loop yields to the event loop between slices
and immediately runs again. With nothing pending it polls every
``idle_interval`` seconds instead of spinning.

``stop()`` only ends the loop. Queries still pending stay pending, and their
callers keep waiting until the scheduler is started again.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from ..config import Config
from ..logging_utils import log_debug
from .engine import PathSearchEngine

SleepFn = Callable[[float], Awaitable[None]]


class SearchScheduler:
    """Two-state (running/stopped) asyncio loop around ``engine.calculate``."""

    def __init__(
        self,
        engine: PathSearchEngine,
        idle_interval: Optional[float] = None,
        sleep: SleepFn = asyncio.sleep,
    ):
        self.engine = engine
        self.idle_interval = (
            idle_interval if idle_interval is not None else Config.TICK_RATE_MS / 1000
        )
        self._sleep = sleep
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self.slices_run = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start the loop on the running event loop. No-op if already running."""
        if self._running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._running = True
        log_debug("[Scheduler] Started")

    def stop(self) -> None:
        """Stop the loop after the current slice; pending queries are abandoned."""
        if not self._running:
            return
        self._running = False
        if self._task is not None and not self._task.done():
            # Slices are synchronous, so this lands between slices.
            self._task.cancel()
        self._task = None
        log_debug(
            f"[Scheduler] Stopped with {self.engine.pending_count} queries pending"
        )

    def tick(self) -> int:
        """Run a single work slice. Returns the number of queries still pending."""
        self.slices_run += 1
        return self.engine.calculate()

    async def _run(self) -> None:
        while self._running:
            remaining = self.tick()
            if remaining:
                await self._sleep(0)
            else:
                await self._sleep(self.idle_interval)
