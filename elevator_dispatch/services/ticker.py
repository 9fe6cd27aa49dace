"""Periodic trigger that drives the movement simulation."""

import asyncio
import logging
from typing import Optional

from .fleet import FleetService

logger = logging.getLogger(__name__)


class Ticker:
    """
    Calls ``FleetService.tick`` every ``interval`` seconds.

    Attributes:
        service: The fleet service to advance
        interval: Seconds between two ticks
    """

    def __init__(self, service: FleetService, interval: float):
        self.service = service
        self.interval = interval
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._task and not self._task.done():
            return
        self._running = True
        self._task = asyncio.create_task(self._run())
        logger.info("ticker_started: interval=%s", self.interval)

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("ticker_stopped")

    async def _run(self) -> None:
        try:
            while self._running:
                await asyncio.sleep(self.interval)
                await self.service.tick()
        except asyncio.CancelledError:
            logger.info("ticker_task_cancelled")
            raise
