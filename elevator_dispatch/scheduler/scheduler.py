import logging
from typing import Optional

from elevator_dispatch.models.elevator import Elevator
from elevator_dispatch.models.fleet import Fleet
from elevator_dispatch.models.request import Assignment, AssignmentOutcome

# Each queued stop weighs as much as two floors of travel
QUEUE_PENALTY = 2

logger = logging.getLogger(__name__)


class DispatchAssigner:
    """
    Hall call scheduler.

    Picks the elevator with the lowest score for a hall call and queues the
    floor on it. Ties go to the elevator with the lowest id.
    """

    def assign_hall_call(self, fleet: Fleet, request_floor: int) -> Assignment:
        elevator = self._select_best_elevator(fleet, request_floor)
        if elevator is None:
            logger.warning("no_elevator_available: floor=%s", request_floor)
            return Assignment(AssignmentOutcome.NO_ELEVATOR)

        if not elevator.enqueue(request_floor):
            logger.info(
                "redundant_hall_call: floor=%s, elevator_id=%s, current_floor=%s",
                request_floor, elevator.id, elevator.current_floor
            )
            return Assignment(AssignmentOutcome.NO_OP, elevator)

        logger.info(
            "assigned_hall_call: floor=%s, elevator_id=%s, direction=%s",
            request_floor, elevator.id, elevator.direction.value
        )
        return Assignment(AssignmentOutcome.APPLIED, elevator)

    def _select_best_elevator(
        self, fleet: Fleet, request_floor: int
    ) -> Optional[Elevator]:
        best_elevator = None
        best_score = float("inf")
        for elevator in fleet:
            score = self._calculate_score(elevator, request_floor)
            logger.debug(
                "elevator_score: floor=%s, elevator_id=%s, score=%s",
                request_floor, elevator.id, score
            )
            if score < best_score:
                best_score = score
                best_elevator = elevator
        return best_elevator

    def _calculate_score(self, elevator: Elevator, request_floor: int) -> int:
        distance = abs(elevator.current_floor - request_floor)
        return distance + QUEUE_PENALTY * elevator.pending_stops
