from liftsim.models.elevator import ElevatorStatus
from liftsim.models.request import Direction, Request, RequestStatus
from liftsim.scheduler.dispatcher import Dispatcher


def busy(elevator, direction):
    """Put an elevator in motion in ``direction``."""
    elevator.direction = direction
    elevator.status = ElevatorStatus.MOVING
    return elevator


def test_empty_fleet_returns_none():
    dispatcher = Dispatcher([])

    assert dispatcher.assign_elevator(Request("r", 1, 5)) is None


def test_first_idle_elevator_wins(make_elevator):
    elevators = [make_elevator(1, floor=1), make_elevator(2, floor=1)]
    dispatcher = Dispatcher(elevators)

    assert dispatcher.assign_elevator(Request("r", 3, 7)).id == 1


def test_idle_elevator_preferred_over_closer_busy_one(make_elevator):
    elevators = [
        busy(make_elevator(1, floor=3), Direction.UP),
        make_elevator(2, floor=10),
    ]
    dispatcher = Dispatcher(elevators)

    assert dispatcher.assign_elevator(Request("r", 3, 7)).id == 2


def test_closest_same_direction_elevator(make_elevator):
    elevators = [
        busy(make_elevator(1, floor=2), Direction.UP),
        busy(make_elevator(2, floor=4), Direction.DOWN),
        busy(make_elevator(3, floor=7), Direction.UP),
    ]
    dispatcher = Dispatcher(elevators)

    assert dispatcher.assign_elevator(Request("r", 5, 9)).id == 3
    assert dispatcher.assign_elevator(Request("r", 4, 1)).id == 2


def test_same_direction_tie_keeps_fleet_order(make_elevator):
    elevators = [
        busy(make_elevator(1, floor=3), Direction.UP),
        busy(make_elevator(2, floor=7), Direction.UP),
    ]
    dispatcher = Dispatcher(elevators)

    assert dispatcher.assign_elevator(Request("r", 5, 9)).id == 1


def test_falls_back_to_closest_overall(make_elevator):
    # moving up from floor 2 towards 5; the request heads down from 3
    first = make_elevator(1, floor=2)
    first.add_stop(5)
    first.tick()
    second = busy(make_elevator(2, floor=9), Direction.UP)
    dispatcher = Dispatcher([first, second])

    assert first.status == ElevatorStatus.MOVING
    assert dispatcher.assign_elevator(Request("r", 3, 1)).id == 1


def test_same_floor_request_has_no_direction_match(make_elevator):
    elevators = [
        busy(make_elevator(1, floor=9), Direction.UP),
        busy(make_elevator(2, floor=6), Direction.DOWN),
    ]
    dispatcher = Dispatcher(elevators)

    assert dispatcher.assign_elevator(Request("r", 5, 5)).id == 2


def test_assign_elevator_is_pure(make_elevator):
    elevators = [
        busy(make_elevator(1, floor=2), Direction.UP),
        busy(make_elevator(2, floor=8), Direction.DOWN),
    ]
    dispatcher = Dispatcher(elevators)
    request = Request("r", 6, 2)
    before = [elevator.to_dict() for elevator in elevators]

    picks = {dispatcher.assign_elevator(request).id for _ in range(5)}

    assert picks == {2}
    assert [elevator.to_dict() for elevator in elevators] == before
    assert request.status == RequestStatus.PENDING


def test_sees_elevators_added_after_construction(make_elevator):
    elevators = []
    dispatcher = Dispatcher(elevators)
    elevators.append(make_elevator(1))

    assert dispatcher.assign_elevator(Request("r", 2, 3)).id == 1


def test_pending_requests_tracking():
    dispatcher = Dispatcher([])
    first = Request("1", 1, 5)
    second = Request("2", 4, 2)

    assert not dispatcher.has_pending_requests()

    dispatcher.add_request(first)
    dispatcher.add_request(second)
    dispatcher.add_request(first)

    assert dispatcher.has_pending_requests()
    assert dispatcher.pending_requests() == [first, second]

    first.mark_assigned()
    second.mark_assigned()

    assert not dispatcher.has_pending_requests()
    assert dispatcher.requests == (first, second)
