#!/usr/bin/env python3
"""
Headless Simulation Entry Point

Runs the fleet and its ticker without the HTTP gateway. Hall and panel
calls arrive on the elevator:requests channel, events go to the sinks
named in EVENT_SINKS (Redis pub/sub when run this way).

    python -m elevator_dispatch.controller.main
"""

import asyncio
import signal

import structlog

from elevator_dispatch import config
from elevator_dispatch.services.factory import create_fleet_service
from elevator_dispatch.services.listener import RequestListener
from elevator_dispatch.services.ticker import Ticker

logger = structlog.get_logger(__name__)


async def main():
    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)

    sink_names = [name for name in config.EVENT_SINKS if name != "websocket"]
    service = create_fleet_service(sink_names=sink_names)
    await service.initialize_fleet(
        config.NUM_FLOORS, config.NUM_ELEVATORS, config.START_POSITIONS
    )
    ticker = Ticker(service, config.TICK_INTERVAL)
    listener = RequestListener(service)

    try:
        logger.info(
            "simulation_starting",
            floors=config.NUM_FLOORS,
            elevators=config.NUM_ELEVATORS,
            interval=config.TICK_INTERVAL,
        )
        await listener.start()
        ticker.start()
        await shutdown_event.wait()
        logger.info("shutdown_signal_received")
    except asyncio.CancelledError:
        logger.info("simulation_shutdown_requested")
    finally:
        await ticker.stop()
        if listener.running:
            await listener.stop()
        await service.close()
        logger.info("simulation_stopped")


if __name__ == "__main__":
    config.configure_logging()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Service stopped by keyboard interrupt")
