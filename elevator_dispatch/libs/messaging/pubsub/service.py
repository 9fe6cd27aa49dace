"""Pub/Sub service implementation."""

import logging
from typing import Any, Dict, Optional, Union

from elevator_dispatch import config

from .backends.redis import RedisPubSubBackend
from .base import PubSubClient

logger = logging.getLogger(__name__)


class PubSubService:
    """High-level pub/sub service with a simple interface."""

    _backend: PubSubClient

    def __init__(
        self,
        backend: Optional[Union[str, PubSubClient]] = None,
        **backend_options,
    ) -> None:
        if backend is None or backend == "redis":
            options = {
                "host": config.REDIS_HOST,
                "port": config.REDIS_PORT,
                "db": config.REDIS_DB,
                "password": config.REDIS_PASSWORD,
                **backend_options,
            }
            self._backend = RedisPubSubBackend(**options)
        elif isinstance(backend, PubSubClient):
            self._backend = backend
        else:
            raise ValueError(f"Unsupported pub/sub backend: {backend}")

    async def publish(self, channel: str, message: Union[str, Dict[str, Any]]) -> None:
        return await self._backend.publish(channel, message)

    async def subscribe(self, *channels: str) -> None:
        await self._backend.subscribe(*channels)

    async def unsubscribe(self, *channels: str) -> None:
        await self._backend.unsubscribe(*channels)

    async def get_message(self, timeout: float = 1.0) -> Optional[Dict[str, Any]]:
        """Get the next message from the subscribed channels.

        Args:
            timeout: Maximum time in seconds to wait for a message

        Returns:
            The message if available, None if no message was received within the timeout
        """
        return await self._backend.get_message(timeout=timeout)

    async def close(self) -> None:
        if self._backend:
            await self._backend.close()


# Global pub/sub instance
_pubsub_service: Optional[PubSubService] = None


def get_pubsub() -> PubSubService:
    """Get the global pub/sub service instance, creating it on first use."""
    global _pubsub_service
    if _pubsub_service is None:
        _pubsub_service = PubSubService()
    return _pubsub_service


def create_pubsub_service(backend=None, **backend_options) -> PubSubService:
    """Create a new, independent pub/sub service instance.

    Use this when a component needs a connection separate from the global one,
    for example a test publishing through a fake Redis client.
    """
    return PubSubService(backend, **backend_options)


async def close() -> None:
    """Close the connection to the global pub/sub backend."""
    global _pubsub_service
    if _pubsub_service:
        await _pubsub_service.close()
        _pubsub_service = None
