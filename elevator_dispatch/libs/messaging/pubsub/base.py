"""Abstract base class for pub/sub clients."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union


class PubSubClient(ABC):
    """Interface every pub/sub backend implements."""

    @abstractmethod
    async def publish(self, channel: str, message: Union[str, Dict[str, Any]]) -> None:
        """Publish a message to a channel.

        Args:
            channel: The channel to publish to.
            message: A string, or a dictionary sent as JSON.
        """
        pass

    @abstractmethod
    async def subscribe(self, *channels: str) -> None:
        """Subscribe to one or more channels."""
        pass

    @abstractmethod
    async def unsubscribe(self, *channels: str) -> None:
        pass

    @abstractmethod
    async def get_message(self, timeout: float = 1.0) -> Optional[Dict[str, Any]]:
        """Get the next message from the subscribed channels.

        Args:
            timeout: Maximum time in seconds to wait for a message

        Returns:
            The decoded message, or None if nothing arrived within the timeout
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection to the pub/sub backend."""
        pass
