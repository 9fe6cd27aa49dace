"""
Fleet aggregate: every elevator in the building plus the floor count.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from .elevator import Elevator

logger = logging.getLogger(__name__)


class Fleet:
    """
    Owns all elevators of the building.

    Elevators are only created by ``initialize``; there is no dynamic
    add or remove. Iteration always yields elevators by ascending id.
    """

    def __init__(self) -> None:
        self.number_of_floors: int = 0
        self.elevators: Dict[int, Elevator] = {}

    def initialize(
        self,
        total_floors: int,
        number_of_elevators: int,
        start_positions: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Replace the fleet with freshly built elevators.

        Any queued stops of the previous fleet are discarded.

        Args:
            total_floors: Number of floors in the building
            number_of_elevators: How many elevators to create
            start_positions: Starting floor per elevator; missing entries start at 0
        """
        positions = list(start_positions or [])
        self.number_of_floors = total_floors
        self.elevators = {
            i: Elevator(elevator_id=i, initial_floor=positions[i] if i < len(positions) else 0)
            for i in range(number_of_elevators)
        }
        logger.info(
            "fleet_initialized: elevators=%s, floors=%s, positions=%s",
            number_of_elevators,
            total_floors,
            [e.current_floor for e in self],
        )

    def get(self, elevator_id: int) -> Optional[Elevator]:
        return self.elevators.get(elevator_id)

    def __iter__(self) -> Iterator[Elevator]:
        for elevator_id in sorted(self.elevators):
            yield self.elevators[elevator_id]

    def __len__(self) -> int:
        return len(self.elevators)

    def snapshot(self) -> List[dict]:
        """Elevator states ordered by id."""
        return [elevator.to_dict() for elevator in self]
