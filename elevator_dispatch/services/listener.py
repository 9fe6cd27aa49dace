"""Pub/sub intake for hall and panel calls."""

import asyncio
import logging
from typing import Optional

from elevator_dispatch.channels import ELEVATOR_REQUESTS
from elevator_dispatch.exceptions import FleetError
from elevator_dispatch.libs.messaging.pubsub import PubSubService, create_pubsub_service
from elevator_dispatch.models.request import parse_request

from .fleet import FleetService

logger = logging.getLogger(__name__)


class RequestListener:
    """
    Feeds requests published on ``elevator:requests`` into a FleetService.

    The listener owns its pub/sub connection, since a subscribed Redis
    connection cannot be shared with the event sink.
    """

    def __init__(
        self,
        service: FleetService,
        pubsub: Optional[PubSubService] = None,
        channel: str = ELEVATOR_REQUESTS,
        poll_timeout: float = 1.0,
    ):
        self.service = service
        self.pubsub = pubsub or create_pubsub_service()
        self.channel = channel
        self.poll_timeout = poll_timeout
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._task and not self._task.done():
            return
        await self.pubsub.subscribe(self.channel)
        self._running = True
        self._task = asyncio.create_task(self._run())
        logger.info("request_listener_started: channel=%s", self.channel)

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self.pubsub.unsubscribe(self.channel)
        await self.pubsub.close()
        logger.info("request_listener_stopped")

    async def _run(self) -> None:
        try:
            while self._running:
                message = await self.pubsub.get_message(timeout=self.poll_timeout)
                if message is None:
                    continue
                await self.handle_message(message)
        except asyncio.CancelledError:
            logger.info("request_listener_task_cancelled")
            raise

    async def handle_message(self, message: dict) -> None:
        """Apply one decoded message; bad requests are logged and dropped."""
        try:
            request = parse_request(message)
            await self.service.handle_request(request)
        except (ValueError, FleetError) as e:
            logger.warning("request_rejected: message=%s, error=%s", message, e)
