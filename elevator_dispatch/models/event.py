"""
Events emitted by the dispatch core.

Each event carries the wire name the browser client listens for and a
payload built by ``to_dict``. The gateway decides how to deliver them.
"""

from typing import List, Optional

from .elevator import Direction


class Event:
    """Base class for fleet events."""

    name: str = ""
    elevator_id: Optional[int] = None

    def to_dict(self) -> dict:
        raise NotImplementedError

    def to_message(self) -> dict:
        """Envelope used on the WebSocket and pub/sub transports."""
        return {"event": self.name, "data": self.to_dict()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()})"


class PositionUpdate(Event):
    """An elevator moved, or resumed after a dwell tick."""

    name = "elevatorUpdate"

    def __init__(self, elevator_id: int, current_floor: int, direction: Direction):
        self.elevator_id = elevator_id
        self.current_floor = current_floor
        self.direction = direction

    def to_dict(self) -> dict:
        return {
            "elevatorId": self.elevator_id,
            "currentFloor": self.current_floor,
            "movingDirection": self.direction.value,
        }


class Stopped(Event):
    name = "elevatorStopped"

    def __init__(self, elevator_id: int, floor: int):
        self.elevator_id = elevator_id
        self.floor = floor

    def to_dict(self) -> dict:
        return {"elevatorId": self.elevator_id, "floor": self.floor}


class PanelReset(Event):
    """The panel button for ``floor`` inside the elevator can be switched off."""

    name = "panelButtonReset"

    def __init__(self, elevator_id: int, floor: int):
        self.elevator_id = elevator_id
        self.floor = floor

    def to_dict(self) -> dict:
        return {"elevatorId": self.elevator_id, "floor": self.floor}


class FleetUpdate(Event):
    """Full fleet snapshot, sent after a rebuild or an applied hall call."""

    name = "elevatorUpdate"

    def __init__(self, elevators: List[dict]):
        self.elevators = elevators

    def to_dict(self) -> dict:
        return {"elevators": self.elevators}
