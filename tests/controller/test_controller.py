import random

from elevator_dispatch.controller.controller import MovementSimulator
from elevator_dispatch.models.elevator import Direction, Elevator
from elevator_dispatch.models.event import PanelReset, PositionUpdate, Stopped
from elevator_dispatch.models.fleet import Fleet
from elevator_dispatch.scheduler.panel import PanelRequestHandler
from elevator_dispatch.scheduler.scheduler import DispatchAssigner


def test_hall_call_scenario(fleet):
    DispatchAssigner().assign_hall_call(fleet, 7)
    simulator = MovementSimulator()
    elevator = fleet.get(1)

    assert simulator.tick(fleet) == [PositionUpdate(1, 6, Direction.UP)]

    events = simulator.tick(fleet)
    assert events == [
        Stopped(1, 7),
        PanelReset(1, 7),
        PositionUpdate(1, 7, Direction.IDLE),
    ]
    assert elevator.current_floor == 7
    assert elevator.paused is True
    assert elevator.direction == Direction.IDLE
    assert elevator.up_queue == []

    # Dwell tick
    assert simulator.tick(fleet) == [
        PositionUpdate(1, 7, Direction.IDLE),
        Stopped(1, 7),
    ]
    assert elevator.paused is False

    assert simulator.tick(fleet) == []


def test_idle_fleet_emits_nothing(fleet):
    assert MovementSimulator().tick(fleet) == []


def test_panel_call_for_current_floor_produces_no_events(fleet):
    PanelRequestHandler().assign_panel_call(fleet, 0, 0)

    assert MovementSimulator().tick(fleet) == []
    assert fleet.get(0).current_floor == 0


def test_single_hall_call_converges():
    fleet = Fleet()
    fleet.initialize(10, 1, [0])
    DispatchAssigner().assign_hall_call(fleet, 6)
    simulator = MovementSimulator()
    elevator = fleet.get(0)

    ticks = 0
    while ticks < 20 and not (
        elevator.current_floor == 6 and elevator.direction == Direction.IDLE
    ):
        simulator.tick(fleet)
        ticks += 1

    assert ticks <= 6 + 1
    assert elevator.current_floor == 6
    assert elevator.up_queue == [] and elevator.down_queue == []


def test_direction_switches_after_last_stop_of_queue():
    fleet = Fleet()
    fleet.initialize(10, 1, [5])
    handler = PanelRequestHandler()
    handler.assign_panel_call(fleet, 0, 7)
    handler.assign_panel_call(fleet, 0, 3)
    simulator = MovementSimulator()
    elevator = fleet.get(0)

    simulator.tick(fleet)
    events = simulator.tick(fleet)

    assert elevator.current_floor == 7
    assert elevator.direction == Direction.DOWN
    assert events[-1] == PositionUpdate(0, 7, Direction.DOWN)

    # Dwell, then head down
    simulator.tick(fleet)
    assert simulator.tick(fleet) == [PositionUpdate(0, 6, Direction.DOWN)]


def test_direction_kept_while_queue_has_stops():
    fleet = Fleet()
    fleet.initialize(10, 1, [0])
    handler = PanelRequestHandler()
    handler.assign_panel_call(fleet, 0, 2)
    handler.assign_panel_call(fleet, 0, 4)
    simulator = MovementSimulator()
    elevator = fleet.get(0)

    simulator.tick(fleet)
    events = simulator.tick(fleet)

    assert Stopped(0, 2) in events
    assert elevator.direction == Direction.UP
    assert elevator.up_queue == [4]


def test_arrival_when_tick_starts_on_target():
    elevator = Elevator.from_dict(
        {"id": 0, "current_floor": 3, "up_queue": [3, 8], "direction": "up"}
    )

    events = MovementSimulator().step(elevator)

    assert events == [Stopped(0, 3), PanelReset(0, 3)]
    assert elevator.paused is True
    assert elevator.up_queue == [8]
    assert elevator.direction == Direction.UP


def test_empty_active_queue_hands_over_to_other_direction():
    elevator = Elevator.from_dict(
        {"id": 0, "current_floor": 5, "down_queue": [2], "direction": "up"}
    )

    assert MovementSimulator().step(elevator) == []
    assert elevator.direction == Direction.DOWN
    assert elevator.current_floor == 5


def test_tick_preserves_invariants(check_invariants):
    rng = random.Random(1234)
    fleet = Fleet()
    fleet.initialize(12, 3, [0, 6, 12])
    assigner = DispatchAssigner()
    handler = PanelRequestHandler()
    simulator = MovementSimulator()

    for _ in range(2000):
        choice = rng.random()
        if choice < 0.25:
            assigner.assign_hall_call(fleet, rng.randint(0, 12))
        elif choice < 0.5:
            handler.assign_panel_call(fleet, rng.randint(0, 3), rng.randint(0, 12))
        else:
            before = {e.id: e.current_floor for e in fleet}
            simulator.tick(fleet)
            for elevator in fleet:
                assert abs(elevator.current_floor - before[elevator.id]) <= 1
                assert 0 <= elevator.current_floor <= 12
        check_invariants(fleet)
