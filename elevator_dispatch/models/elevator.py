"""
Elevator model for the dispatch simulator.
"""

import bisect
import enum
import operator
from typing import List, Optional


class Direction(str, enum.Enum):
    """Travel direction of an elevator."""

    UP = "up"
    DOWN = "down"
    IDLE = "idle"


class Elevator:
    """
    Represents a single elevator car.

    Attributes:
        id: Unique identifier of the elevator, fixed when the fleet is built
        current_floor: The floor where the elevator currently is
        up_queue: Pending stops while moving up, strictly ascending
        down_queue: Pending stops while moving down, strictly descending
        direction: Current travel direction
        paused: True for the single dwell tick after arriving at a floor
    """

    def __init__(self, elevator_id: int, initial_floor: int = 0):
        self.id = elevator_id
        self.current_floor = initial_floor
        self.up_queue: List[int] = []
        self.down_queue: List[int] = []
        self.direction = Direction.IDLE
        self.paused = False

    @property
    def pending_stops(self) -> int:
        """Number of floors waiting in both queues."""
        return len(self.up_queue) + len(self.down_queue)

    def has_stop(self, floor: int) -> bool:
        """Whether the floor is queued in either direction."""
        return floor in self.up_queue or floor in self.down_queue

    def enqueue(self, floor: int) -> bool:
        """
        Queue a stop relative to the current floor.

        Floors above go to the up queue, floors below to the down queue.
        The current floor and floors already queued are rejected.

        Args:
            floor: The floor to stop at

        Returns:
            True if the floor was inserted
        """
        if floor == self.current_floor or self.has_stop(floor):
            return False

        if floor > self.current_floor:
            bisect.insort(self.up_queue, floor)
        else:
            # down_queue is descending, so order it by the negated floor
            bisect.insort(self.down_queue, floor, key=operator.neg)

        if self.direction == Direction.IDLE:
            self.direction = (
                Direction.UP if floor > self.current_floor else Direction.DOWN
            )
        return True

    def queue_for(self, direction: Direction) -> Optional[List[int]]:
        if direction == Direction.UP:
            return self.up_queue
        if direction == Direction.DOWN:
            return self.down_queue
        return None

    def to_dict(self) -> dict:
        """
        Convert elevator state to a dictionary.

        Returns:
            Dictionary representation of elevator state
        """
        return {
            "id": self.id,
            "current_floor": self.current_floor,
            "up_queue": list(self.up_queue),
            "down_queue": list(self.down_queue),
            "direction": self.direction.value,
            "paused": self.paused,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Elevator":
        """
        Create an Elevator instance from a dictionary.

        Queues are re-sorted so a hand-written snapshot still satisfies
        the ordering of each queue.

        Args:
            data: Dictionary containing elevator state

        Returns:
            New Elevator instance
        """
        elevator = cls(elevator_id=data["id"], initial_floor=data["current_floor"])
        elevator.up_queue = sorted(set(data.get("up_queue", [])))
        elevator.down_queue = sorted(set(data.get("down_queue", [])), reverse=True)
        elevator.direction = Direction(data.get("direction", Direction.IDLE.value))
        elevator.paused = bool(data.get("paused", False))
        return elevator

    def __repr__(self) -> str:
        return (
            f"Elevator(id={self.id}, floor={self.current_floor}, "
            f"direction={self.direction.value}, up={self.up_queue}, "
            f"down={self.down_queue}, paused={self.paused})"
        )
