import logging

from elevator_dispatch.models.fleet import Fleet
from elevator_dispatch.models.request import Assignment, AssignmentOutcome

logger = logging.getLogger(__name__)


class PanelRequestHandler:
    """Queues destinations chosen on the panel inside a specific elevator."""

    def assign_panel_call(self, fleet: Fleet, elevator_id: int, floor: int) -> Assignment:
        elevator = fleet.get(elevator_id)
        if elevator is None:
            logger.warning("elevator_not_found: elevator_id=%s, floor=%s", elevator_id, floor)
            return Assignment(AssignmentOutcome.NOT_FOUND)

        # Already here or already on the way: nothing to change
        if not elevator.enqueue(floor):
            logger.info(
                "redundant_panel_call: elevator_id=%s, floor=%s", elevator_id, floor
            )
            return Assignment(AssignmentOutcome.NO_OP, elevator)

        logger.info(
            "assigned_panel_call: elevator_id=%s, floor=%s, direction=%s",
            elevator_id, floor, elevator.direction.value
        )
        return Assignment(AssignmentOutcome.APPLIED, elevator)
