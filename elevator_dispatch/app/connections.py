"""WebSocket connection registry that doubles as an event sink."""

import logging
from typing import Any, Dict, Set

from fastapi import WebSocket, WebSocketDisconnect

from elevator_dispatch.models.event import Event
from elevator_dispatch.services.sinks import EventSink

logger = logging.getLogger(__name__)


class ConnectionManager(EventSink):
    """Keeps track of connected browsers and broadcasts events to them."""

    def __init__(self):
        self.clients: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        logger.info("client_connected: clients=%s", len(self.clients))

    def disconnect(self, websocket: WebSocket) -> None:
        self.clients.discard(websocket)
        logger.info("client_disconnected: clients=%s", len(self.clients))

    async def send(self, websocket: WebSocket, message: Dict[str, Any]) -> None:
        await websocket.send_json(message)

    async def broadcast(self, message: Dict[str, Any]) -> None:
        disconnected = set()
        for client in list(self.clients):
            try:
                await client.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                disconnected.add(client)

        for client in disconnected:
            self.disconnect(client)

    async def publish(self, event: Event) -> None:
        await self.broadcast(event.to_message())

    async def close(self) -> None:
        self.clients.clear()
