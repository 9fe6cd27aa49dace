"""
Exceptions raised by the gateway layer.

The dispatch core never raises; it reports outcomes through
``Assignment``. These errors are for input the gateway refuses to pass on.
"""


class FleetError(Exception):
    """Base exception for fleet request errors."""

    pass


class InvalidFloorError(FleetError):
    """Raised when a floor lies outside the building."""

    def __init__(self, floor: int, number_of_floors: int):
        self.floor = floor
        self.number_of_floors = number_of_floors
        super().__init__(
            f"floor {floor} is outside the building (0..{number_of_floors})"
        )


class ElevatorNotFoundError(FleetError):
    """Raised when a request names an elevator that does not exist."""

    def __init__(self, elevator_id: int):
        self.elevator_id = elevator_id
        super().__init__(f"elevator {elevator_id} not found")


__all__ = [
    "FleetError",
    "InvalidFloorError",
    "ElevatorNotFoundError",
]
