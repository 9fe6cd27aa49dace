"""
Pub/Sub package for Redis-based messaging.

Basic usage:
    >>> from elevator_dispatch.libs.messaging.pubsub import get_pubsub
    >>>
    >>> await get_pubsub().publish('elevator:system', {'key': 'value'})
"""

from .base import PubSubClient
from .exceptions import (
    PubSubConnectionError,
    PubSubError,
    PubSubPublishError,
    PubSubSubscribeError,
)
from .service import PubSubService, close, create_pubsub_service, get_pubsub

__all__ = [
    # Service and initialization
    "PubSubClient",
    "PubSubService",
    "get_pubsub",
    "create_pubsub_service",
    "close",
    # Exceptions
    "PubSubError",
    "PubSubConnectionError",
    "PubSubPublishError",
    "PubSubSubscribeError",
]
