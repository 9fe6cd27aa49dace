"""
Event sinks.

A sink receives every event the fleet produces and delivers it to whoever
is observing: browser clients over a WebSocket, or other services over
Redis pub/sub.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from elevator_dispatch.channels import ELEVATOR_EVENTS, ELEVATOR_SYSTEM
from elevator_dispatch.libs.messaging.pubsub import PubSubService, get_pubsub
from elevator_dispatch.models.event import Event

logger = logging.getLogger(__name__)


class EventSink(ABC):
    """Destination for fleet events."""

    @abstractmethod
    async def publish(self, event: Event) -> None:
        pass

    async def close(self) -> None:
        pass


class PubSubEventSink(EventSink):
    """
    Publishes events to Redis channels.

    Per-elevator events go to ``elevator:events:{id}``, fleet snapshots to
    ``elevator:system``.
    """

    def __init__(self, pubsub: Optional[PubSubService] = None):
        self.pubsub = pubsub or get_pubsub()

    @staticmethod
    def channel_for(event: Event) -> str:
        if event.elevator_id is None:
            return ELEVATOR_SYSTEM
        return ELEVATOR_EVENTS.format(event.elevator_id)

    async def publish(self, event: Event) -> None:
        await self.pubsub.publish(self.channel_for(event), event.to_message())

    async def close(self) -> None:
        await self.pubsub.close()
