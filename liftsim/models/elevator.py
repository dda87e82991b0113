"""
Elevator model for the simulator.

Each elevator runs a SCAN (elevator algorithm) state machine: it keeps one
set of stops to serve while ascending and one to serve while descending,
and finishes its sweep in one direction before reversing.
"""

import enum
from typing import List, Set

from liftsim.models.request import DEFAULT_MAX_FLOOR, DEFAULT_MIN_FLOOR, Direction

# One tick stands for 10 seconds of travel or dwell time.
MOVE_COOLDOWN_TICKS = 1
STOP_COOLDOWN_TICKS = 1


class ElevatorStatus(str, enum.Enum):
    """Possible states of an elevator."""

    IDLE = "IDLE"
    MOVING = "MOVING"
    STOPPED = "STOPPED"


class Elevator:
    """
    Represents an elevator in the building.

    Attributes:
        id: Unique identifier of the elevator
        current_floor: The floor where the elevator currently is
        direction: Sweep direction (UP, DOWN, or NONE when idle)
        status: IDLE, MOVING or STOPPED
        cooldown_ticks: Ticks to wait before the next move
        min_floor: Lowest floor the elevator can travel to
        max_floor: Highest floor the elevator can travel to
    """

    def __init__(
        self,
        elevator_id: int,
        min_floor: int = DEFAULT_MIN_FLOOR,
        max_floor: int = DEFAULT_MAX_FLOOR,
    ):
        self.id = elevator_id
        self.min_floor = min_floor
        self.max_floor = max_floor
        self.current_floor = min_floor
        self.direction = Direction.NONE
        self.status = ElevatorStatus.IDLE
        self.cooldown_ticks = 0
        self._stops_up: Set[int] = set()
        self._stops_down: Set[int] = set()

    @property
    def stops_up(self) -> List[int]:
        """Floors to serve while ascending, in ascending order."""
        return sorted(self._stops_up)

    @property
    def stops_down(self) -> List[int]:
        """Floors to serve while descending, in descending order."""
        return sorted(self._stops_down, reverse=True)

    @property
    def is_idle(self) -> bool:
        return self.status == ElevatorStatus.IDLE

    def has_stops(self) -> bool:
        return bool(self._stops_up or self._stops_down)

    def add_stop(self, floor: int, direction: Direction = Direction.NONE) -> None:
        """
        Add a floor to visit.

        With an explicit direction the floor goes to the matching stop set
        whatever its position; without one it is filed by its position
        relative to the current floor. An idle elevator starts heading
        towards the new floor.

        Args:
            floor: The floor to stop at
            direction: Sweep on which the stop should be served
        """
        if floor == self.current_floor:
            return

        if direction == Direction.UP:
            self._stops_up.add(floor)
        elif direction == Direction.DOWN:
            self._stops_down.add(floor)
        elif floor > self.current_floor:
            self._stops_up.add(floor)
        else:
            self._stops_down.add(floor)

        if self.direction == Direction.NONE:
            self.direction = Direction.UP if floor > self.current_floor else Direction.DOWN

    def tick(self) -> None:
        """
        Advance the elevator by one unit of simulated time.

        A pending cooldown only counts down. Otherwise the car moves one
        floor in its direction, stops if that floor is queued for the
        current sweep, and re-evaluates its direction. Reversal at
        ``max_floor``/``min_floor`` happens in that re-evaluation, so a car
        never starts a tick heading out of the shaft.
        """
        if self.cooldown_ticks > 0:
            self.cooldown_ticks -= 1
            return

        if self.direction == Direction.NONE:
            self.status = ElevatorStatus.IDLE
            return

        self.status = ElevatorStatus.MOVING
        self.current_floor += 1 if self.direction == Direction.UP else -1
        self.cooldown_ticks = MOVE_COOLDOWN_TICKS

        stops = self._stops_up if self.direction == Direction.UP else self._stops_down
        if self.current_floor in stops:
            stops.discard(self.current_floor)
            self.status = ElevatorStatus.STOPPED
            # dwell replaces the travel cooldown, they do not stack
            self.cooldown_ticks = STOP_COOLDOWN_TICKS

        self._update_direction()

    def _update_direction(self) -> None:
        if not self.has_stops():
            self.direction = Direction.NONE
            self.status = ElevatorStatus.IDLE
        elif self.direction == Direction.UP and (
            not self._stops_up or self.current_floor == self.max_floor
        ):
            self.direction = Direction.DOWN
        elif self.direction == Direction.DOWN and (
            not self._stops_down or self.current_floor == self.min_floor
        ):
            self.direction = Direction.UP

    def get_status(self) -> str:
        """Human readable snapshot of the elevator."""
        up = ",".join(str(floor) for floor in self.stops_up)
        down = ",".join(str(floor) for floor in self.stops_down)
        return (
            f"E{self.id}: Floor {self.current_floor} {self.direction.value} "
            f"| Up:[{up}] Down:[{down}] Status:{self.status.value}"
        )

    def to_dict(self) -> dict:
        """
        Convert elevator state to a dictionary.

        Returns:
            Dictionary representation of elevator state
        """
        return {
            "id": self.id,
            "current_floor": self.current_floor,
            "direction": self.direction.value,
            "status": self.status.value,
            "stops_up": self.stops_up,
            "stops_down": self.stops_down,
            "cooldown_ticks": self.cooldown_ticks,
        }

    def __repr__(self) -> str:
        return f"Elevator(id={self.id}, current_floor={self.current_floor}, direction={self.direction.value}, status={self.status.value})"
