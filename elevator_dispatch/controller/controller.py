"""
Movement simulator

Advances every elevator of the fleet by one step per tick. A step moves a
car at most one floor, handles arrival at the front of its active queue and
the single dwell tick that follows, and switches direction when one queue
runs dry. Events are returned to the caller instead of being sent anywhere.
"""

import logging
from typing import List, Optional

from elevator_dispatch.models.elevator import Direction, Elevator
from elevator_dispatch.models.event import Event, PanelReset, PositionUpdate, Stopped
from elevator_dispatch.models.fleet import Fleet

logger = logging.getLogger(__name__)

OPPOSITE = {Direction.UP: Direction.DOWN, Direction.DOWN: Direction.UP}


class MovementSimulator:
    """Per-tick state machine for the whole fleet."""

    def tick(self, fleet: Fleet) -> List[Event]:
        """
        Run one simulation step for every elevator, by ascending id.

        Args:
            fleet: The fleet to advance

        Returns:
            Events produced during this step, in emission order
        """
        events: List[Event] = []
        for elevator in fleet:
            events.extend(self.step(elevator))
        return events

    def step(self, elevator: Elevator) -> List[Event]:
        events: List[Event] = []
        queue = self._active_queue(elevator)

        if elevator.paused:
            # Dwell tick: report the car as standing, depart next tick
            elevator.paused = False
            events.append(PositionUpdate(elevator.id, elevator.current_floor, Direction.IDLE))
            events.append(Stopped(elevator.id, elevator.current_floor))
            return events

        if not queue:
            return events

        active = elevator.direction
        target = queue[0]
        start_floor = elevator.current_floor

        if elevator.current_floor < target:
            elevator.current_floor += 1
            elevator.direction = Direction.UP
        elif elevator.current_floor > target:
            elevator.current_floor -= 1
            elevator.direction = Direction.DOWN

        if elevator.current_floor == target:
            events.extend(self._arrive(elevator, queue, active))

        if elevator.current_floor != start_floor:
            events.append(
                PositionUpdate(elevator.id, elevator.current_floor, elevator.direction)
            )
        return events

    def _active_queue(self, elevator: Elevator) -> Optional[List[int]]:
        """
        Resolve the queue the elevator is serving, updating its direction.

        Returns None when there is nothing to serve this tick.
        """
        if elevator.direction == Direction.IDLE:
            if elevator.up_queue:
                elevator.direction = Direction.UP
            elif elevator.down_queue:
                elevator.direction = Direction.DOWN
            else:
                return None

        queue = elevator.queue_for(elevator.direction)
        if not queue:
            other = OPPOSITE[elevator.direction]
            elevator.direction = other if elevator.queue_for(other) else Direction.IDLE
            return None
        return queue

    def _arrive(
        self, elevator: Elevator, queue: List[int], active: Direction
    ) -> List[Event]:
        floor = queue.pop(0)
        elevator.paused = True
        logger.info("arrived_at_floor: elevator_id=%s, floor=%s", elevator.id, floor)

        other = OPPOSITE[active]
        if not elevator.up_queue and not elevator.down_queue:
            elevator.direction = Direction.IDLE
        elif not queue:
            elevator.direction = other
        else:
            elevator.direction = active

        return [Stopped(elevator.id, floor), PanelReset(elevator.id, floor)]
