"""Exceptions for the pub/sub service."""

class PubSubError(Exception):
    """Base exception for pub/sub errors."""
    pass


class PubSubConnectionError(PubSubError):
    """Raised when the pub/sub backend cannot be reached."""
    pass


class PubSubPublishError(PubSubError):
    """Raised when there is an error publishing a message."""
    pass


class PubSubSubscribeError(PubSubError):
    """Raised when there is an error subscribing to a channel."""
    pass


__all__ = [
    'PubSubError',
    'PubSubConnectionError',
    'PubSubPublishError',
    'PubSubSubscribeError',
]
