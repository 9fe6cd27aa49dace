"""
Fleet service

Single owner of the fleet. Every request and every tick runs under one
asyncio lock, so a tick never observes a half-applied request. Events are
handed to the sinks after that lock is released, under a second lock that
is taken before the first one is let go, so sinks see the events of
successive operations in the order the operations ran.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence

from elevator_dispatch.controller.controller import MovementSimulator
from elevator_dispatch.exceptions import InvalidFloorError
from elevator_dispatch.models.event import Event, FleetUpdate, PositionUpdate
from elevator_dispatch.models.fleet import Fleet
from elevator_dispatch.models.request import (
    Assignment,
    AssignmentOutcome,
    BaseRequest,
    HallCall,
    PanelCall,
)
from elevator_dispatch.scheduler.panel import PanelRequestHandler
from elevator_dispatch.scheduler.scheduler import DispatchAssigner

from .sinks import EventSink

logger = logging.getLogger(__name__)


class FleetService:
    """Serializes access to the fleet and forwards events to the sinks."""

    def __init__(
        self,
        sinks: Optional[Iterable[EventSink]] = None,
        fleet: Optional[Fleet] = None,
    ):
        self.fleet = fleet or Fleet()
        self.sinks: List[EventSink] = list(sinks or [])
        self.assigner = DispatchAssigner()
        self.panel_handler = PanelRequestHandler()
        self.simulator = MovementSimulator()
        self._lock = asyncio.Lock()
        self._delivery_lock = asyncio.Lock()

    def add_sink(self, sink: EventSink) -> None:
        self.sinks.append(sink)

    @property
    def number_of_floors(self) -> int:
        return self.fleet.number_of_floors

    def _check_floor(self, floor: int) -> None:
        if floor < 0 or floor > self.fleet.number_of_floors:
            logger.warning(
                "invalid_floor: floor=%s, number_of_floors=%s",
                floor, self.fleet.number_of_floors
            )
            raise InvalidFloorError(floor, self.fleet.number_of_floors)

    async def initialize_fleet(
        self,
        total_floors: int,
        number_of_elevators: int,
        start_positions: Optional[Sequence[int]] = None,
    ) -> List[dict]:
        """Rebuild the fleet, dropping every queued stop."""
        async with self._lock:
            self.fleet.initialize(total_floors, number_of_elevators, start_positions)
            snapshot = self.fleet.snapshot()
            await self._delivery_lock.acquire()
        await self._deliver([FleetUpdate(snapshot)])
        return snapshot

    async def assign_hall_call(self, floor: int) -> Assignment:
        """
        Summon an elevator to ``floor``.

        Raises:
            InvalidFloorError: If the floor is outside the building
        """
        return await self._hall_call(HallCall(floor))

    async def assign_panel_call(self, elevator_id: int, floor: int) -> Assignment:
        """
        Queue ``floor`` on the elevator ``elevator_id``.

        Raises:
            InvalidFloorError: If the floor is outside the building
        """
        return await self._panel_call(PanelCall(elevator_id, floor))

    async def handle_request(self, request: BaseRequest) -> Assignment:
        """Apply a request that arrived as a message, keeping its id in the logs."""
        if isinstance(request, HallCall):
            return await self._hall_call(request)
        if isinstance(request, PanelCall):
            return await self._panel_call(request)
        raise TypeError(f"Unsupported request: {type(request).__name__}")

    async def _hall_call(self, request: HallCall) -> Assignment:
        events: List[Event] = []
        async with self._lock:
            if len(self.fleet) == 0:
                assignment = Assignment(AssignmentOutcome.NO_ELEVATOR)
            else:
                self._check_floor(request.floor)
                assignment = self.assigner.assign_hall_call(self.fleet, request.floor)
                if assignment.applied:
                    events.append(FleetUpdate(self.fleet.snapshot()))
            await self._delivery_lock.acquire()
        logger.info(
            "hall_call_handled: request_id=%s, floor=%s, outcome=%s, elevator_id=%s",
            request.id, request.floor, assignment.outcome.value, assignment.elevator_id
        )
        await self._deliver(events)
        return assignment

    async def _panel_call(self, request: PanelCall) -> Assignment:
        events: List[Event] = []
        async with self._lock:
            self._check_floor(request.floor)
            assignment = self.panel_handler.assign_panel_call(
                self.fleet, request.elevator_id, request.floor
            )
            if assignment.applied:
                elevator = assignment.elevator
                events.append(
                    PositionUpdate(elevator.id, elevator.current_floor, elevator.direction)
                )
            await self._delivery_lock.acquire()
        logger.info(
            "panel_call_handled: request_id=%s, elevator_id=%s, floor=%s, outcome=%s",
            request.id, request.elevator_id, request.floor, assignment.outcome.value
        )
        await self._deliver(events)
        return assignment

    async def tick(self) -> List[Event]:
        """Advance the whole fleet by one step."""
        async with self._lock:
            events = self.simulator.tick(self.fleet)
            await self._delivery_lock.acquire()
        await self._deliver(events)
        return events

    async def snapshot(self) -> dict:
        async with self._lock:
            return {
                "number_of_floors": self.fleet.number_of_floors,
                "elevators": self.fleet.snapshot(),
            }

    async def _deliver(self, events: List[Event]) -> None:
        """Send events to every sink and release the delivery lock."""
        try:
            for event in events:
                for sink in self.sinks:
                    try:
                        await sink.publish(event)
                    except Exception:
                        # A broken transport must not stall the simulation
                        logger.error(
                            "event_delivery_failed: event=%s, sink=%s",
                            event.name, type(sink).__name__,
                            exc_info=True,
                        )
        finally:
            self._delivery_lock.release()

    async def close(self) -> None:
        for sink in self.sinks:
            await sink.close()
