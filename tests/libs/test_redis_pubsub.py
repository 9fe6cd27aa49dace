import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from elevator_dispatch.channels import ELEVATOR_EVENTS, ELEVATOR_SYSTEM
from elevator_dispatch.libs.messaging.pubsub import (
    PubSubPublishError,
    create_pubsub_service,
)
from elevator_dispatch.libs.messaging.pubsub.backends.redis import RedisPubSubBackend


async def next_message(backend, attempts=5):
    for _ in range(attempts):
        message = await backend.get_message(timeout=0.1)
        if message is not None:
            return message
    return None


async def test_publish_dict_is_sent_as_json(redis_client):
    """A dict message arrives on the channel as a JSON document."""
    channel = ELEVATOR_EVENTS.format(1)
    listener = redis_client.pubsub()
    await listener.subscribe(channel)
    await listener.get_message(timeout=1)  # Subscribe confirmation

    backend = RedisPubSubBackend(client=redis_client)
    await backend.publish(channel, {"event": "elevatorStopped", "data": {"floor": 3}})

    message = await listener.get_message(timeout=1)
    assert message is not None
    assert message["type"] == "message"
    assert json.loads(message["data"]) == {"event": "elevatorStopped", "data": {"floor": 3}}

    await listener.unsubscribe()
    await listener.aclose()


async def test_subscribe_and_receive(redis_client):
    backend = RedisPubSubBackend(client=redis_client)
    await backend.subscribe(ELEVATOR_SYSTEM)

    await redis_client.publish(ELEVATOR_SYSTEM, json.dumps({"elevators": []}))

    assert await next_message(backend) == {"elevators": []}

    await backend.unsubscribe(ELEVATOR_SYSTEM)


async def test_non_json_payload_is_wrapped(redis_client):
    backend = RedisPubSubBackend(client=redis_client)
    await backend.subscribe(ELEVATOR_SYSTEM)

    await redis_client.publish(ELEVATOR_SYSTEM, "ping")

    assert await next_message(backend) == {"data": "ping"}


async def test_get_message_without_subscription_returns_none(redis_client):
    backend = RedisPubSubBackend(client=redis_client)

    assert await backend.get_message(timeout=0.1) is None


async def test_publish_error_is_wrapped():
    client = AsyncMock()
    client.publish.side_effect = RedisConnectionError("connection refused")
    backend = RedisPubSubBackend(client=client)

    with pytest.raises(PubSubPublishError):
        await backend.publish(ELEVATOR_SYSTEM, {"elevators": []})


async def test_service_delegates_to_backend():
    backend = AsyncMock(spec=RedisPubSubBackend)
    service = create_pubsub_service(backend)

    await service.publish(ELEVATOR_SYSTEM, "hello")
    await service.close()

    backend.publish.assert_awaited_once_with(ELEVATOR_SYSTEM, "hello")
    backend.close.assert_awaited_once()


def test_service_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_pubsub_service("kafka")
