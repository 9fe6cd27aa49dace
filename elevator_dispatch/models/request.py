"""
Request models for the dispatch core.

This module contains two types of requests:
1. HallCall - summon any elevator to a floor (button outside the car)
2. PanelCall - destination chosen inside a specific elevator

Assignment is the result both handlers return so the caller can tell an
applied request from a no-op or a miss.
"""

import enum
import time
import uuid
from typing import Optional

from .elevator import Elevator


class AssignmentOutcome(str, enum.Enum):
    """Result of handling a hall or panel call."""

    APPLIED = "applied"
    NO_OP = "no_op"
    NOT_FOUND = "not_found"
    NO_ELEVATOR = "no_elevator"


class BaseRequest:
    """
    Base class for elevator requests.

    Attributes:
        id: Unique identifier for the request
        timestamp: When the request was created
    """

    def __init__(self):
        self.id = str(uuid.uuid4())
        self.timestamp = time.time()

    def to_dict(self) -> dict:
        return {"id": self.id, "timestamp": self.timestamp}


class HallCall(BaseRequest):
    """
    Request from outside the elevator.

    Attributes:
        floor: The floor where the button was pressed
    """

    def __init__(self, floor: int):
        super().__init__()
        self.floor = floor

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({"type": "hall", "floor": self.floor})
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "HallCall":
        request = cls(floor=int(data["floor"]))
        request.id = data.get("id", request.id)
        request.timestamp = data.get("timestamp", request.timestamp)
        return request


class PanelCall(BaseRequest):
    """
    Request from inside the elevator.

    Attributes:
        elevator_id: ID of the elevator where the button was pressed
        floor: The target floor
    """

    def __init__(self, elevator_id: int, floor: int):
        super().__init__()
        self.elevator_id = elevator_id
        self.floor = floor

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            {"type": "panel", "elevator_id": self.elevator_id, "floor": self.floor}
        )
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "PanelCall":
        request = cls(elevator_id=int(data["elevator_id"]), floor=int(data["floor"]))
        request.id = data.get("id", request.id)
        request.timestamp = data.get("timestamp", request.timestamp)
        return request


def parse_request(data: dict) -> BaseRequest:
    """
    Build a request from its dictionary form.

    Args:
        data: Dictionary produced by ``to_dict``; ``id`` and ``timestamp`` are optional

    Raises:
        ValueError: If the type is unknown or a field is missing
    """
    request_type = data.get("type")
    try:
        if request_type == "hall":
            return HallCall.from_dict(data)
        if request_type == "panel":
            return PanelCall.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed {request_type} request: {e}") from e
    raise ValueError(f"unknown request type: {request_type!r}")


class Assignment:
    """
    Outcome of a hall or panel call.

    Attributes:
        outcome: What happened to the request
        elevator: The selected elevator, None for NOT_FOUND and NO_ELEVATOR
    """

    def __init__(self, outcome: AssignmentOutcome, elevator: Optional[Elevator] = None):
        self.outcome = outcome
        self.elevator = elevator

    @property
    def applied(self) -> bool:
        return self.outcome == AssignmentOutcome.APPLIED

    @property
    def elevator_id(self) -> Optional[int]:
        return self.elevator.id if self.elevator is not None else None

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "elevator_id": self.elevator_id,
            "elevator": self.elevator.to_dict() if self.elevator is not None else None,
        }

    def __repr__(self) -> str:
        return f"Assignment(outcome={self.outcome.value}, elevator_id={self.elevator_id})"
