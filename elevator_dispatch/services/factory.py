"""Factory for creating and configuring FleetService instances."""

import logging
from typing import Optional, Sequence

from elevator_dispatch import config

from .fleet import FleetService
from .sinks import EventSink, PubSubEventSink

logger = logging.getLogger(__name__)


def create_fleet_service(
    sink_names: Optional[Sequence[str]] = None,
    websocket_sink: Optional[EventSink] = None,
) -> FleetService:
    """
    Create a FleetService wired to the configured sinks.

    Args:
        sink_names: Sink names to enable; defaults to ``config.EVENT_SINKS``
        websocket_sink: Sink used for the ``websocket`` name, when a gateway is running
    """
    names = config.EVENT_SINKS if sink_names is None else sink_names
    service = FleetService()
    for name in names:
        if name == "websocket":
            if websocket_sink is None:
                logger.warning("websocket_sink_unavailable: skipping")
                continue
            service.add_sink(websocket_sink)
        elif name == "redis":
            service.add_sink(PubSubEventSink())
        else:
            raise ValueError(f"Unsupported event sink: {name}")
    logger.info("fleet_service_created: sinks=%s", [type(s).__name__ for s in service.sinks])
    return service
