"""Redis Pub/Sub backend."""

import json
import logging
from typing import Any, Dict, Optional, Union

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..base import PubSubClient
from ..exceptions import (
    PubSubConnectionError,
    PubSubPublishError,
    PubSubSubscribeError,
)

logger = logging.getLogger(__name__)


class RedisPubSubBackend(PubSubClient):
    """Redis implementation of the PubSubClient interface."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        client: Optional[Redis] = None,
        **kwargs: Any,
    ):
        """Initialize with Redis connection parameters, or an existing client."""
        self._client: Optional[Redis] = client
        self._pubsub = None
        self._subscriptions = set()
        self._client_params = {
            "host": host,
            "port": port,
            "db": db,
            "password": password,
            "decode_responses": True,
            **kwargs,
        }

    @property
    def client(self) -> Redis:
        """Get the Redis client, creating it on first use."""
        if self._client is None:
            self._client = Redis(**self._client_params)
        return self._client

    async def _ensure_pubsub(self):
        if self._pubsub is None:
            try:
                await self.client.ping()
            except RedisError as e:
                logger.error("redis_connection_error: error=%s", e)
                raise PubSubConnectionError(f"Redis connection error: {e}") from e
            self._pubsub = self.client.pubsub()
        return self._pubsub

    async def publish(
        self, channel: str, message: Union[str, Dict[str, Any]]
    ) -> None:
        msg = json.dumps(message) if isinstance(message, dict) else str(message)
        try:
            await self.client.publish(channel, msg)
        except RedisError as e:
            logger.error("publish_failed: channel=%s, error=%s", channel, e)
            raise PubSubPublishError(f"Failed to publish message: {e}") from e
        logger.debug("published: channel=%s, message=%s", channel, msg)

    async def subscribe(self, *channels: str) -> None:
        pubsub = await self._ensure_pubsub()
        new_channels = [c for c in channels if c not in self._subscriptions]
        if not new_channels:
            return
        try:
            await pubsub.subscribe(*new_channels)
        except RedisError as e:
            raise PubSubSubscribeError(f"Failed to subscribe: {e}") from e
        self._subscriptions.update(new_channels)
        logger.debug("subscribed: channels=%s", new_channels)

    async def unsubscribe(self, *channels: str) -> None:
        targets = [c for c in channels if c in self._subscriptions]
        if self._pubsub is not None and targets:
            await self._pubsub.unsubscribe(*targets)
            self._subscriptions.difference_update(targets)
            logger.debug("unsubscribed: channels=%s", targets)

    def _decode_message(self, message_data: Union[str, bytes]) -> Dict[str, Any]:
        """Decode message data, attempting JSON deserialization."""
        try:
            decoded = (
                message_data.decode()
                if isinstance(message_data, bytes)
                else message_data
            )
            data = json.loads(decoded)
            if isinstance(data, dict):
                return data
        except (json.JSONDecodeError, AttributeError):
            pass  # Not a JSON object
        return {"data": message_data}

    async def get_message(self, timeout: float = 1.0) -> Optional[Dict[str, Any]]:
        if not self._subscriptions or self._pubsub is None:
            return None

        message = await self._pubsub.get_message(
            ignore_subscribe_messages=True, timeout=timeout
        )
        if message and message["type"] == "message":
            return self._decode_message(message["data"])
        return None

    async def close(self) -> None:
        if self._pubsub is not None:
            if self._subscriptions:
                await self._pubsub.unsubscribe(*self._subscriptions)
                self._subscriptions.clear()
            await self._pubsub.aclose()
            self._pubsub = None
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.debug("Closed Redis Pub/Sub client")
