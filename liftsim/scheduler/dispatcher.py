"""
Elevator request dispatcher.

Tracks incoming requests and picks the elevator that should serve each of
them. Selection never mutates the fleet or the request; committing an
assignment is left to the controller.
"""

from typing import List, Optional, Sequence, Tuple

import structlog

from liftsim.models.elevator import Elevator
from liftsim.models.request import Request

logger = structlog.get_logger(__name__)


class Dispatcher:
    """
    Assigns requests to elevators.

    Selection strategy, first match wins:
    1. The first IDLE elevator in fleet order.
    2. The closest elevator already travelling in the request's direction.
    3. The closest elevator overall.
    """

    def __init__(self, elevators: Sequence[Elevator]):
        self._elevators = elevators
        self._requests: List[Request] = []

    @property
    def elevators(self) -> Tuple[Elevator, ...]:
        return tuple(self._elevators)

    @property
    def requests(self) -> Tuple[Request, ...]:
        """Every tracked request in arrival order, assigned ones included."""
        return tuple(self._requests)

    def add_request(self, request: Request) -> None:
        """
        Track a new request.

        Floors were validated when the request was built, so the request is
        accepted as is. The same request object is never tracked twice.

        Args:
            request: The request to track
        """
        if any(tracked is request for tracked in self._requests):
            logger.warning("duplicate_request_ignored", request_id=request.id)
            return
        self._requests.append(request)

    def has_pending_requests(self) -> bool:
        return any(request.is_pending for request in self._requests)

    def pending_requests(self) -> List[Request]:
        return [request for request in self._requests if request.is_pending]

    def assign_elevator(self, request: Request) -> Optional[Elevator]:
        """
        Select the elevator that should serve ``request``.

        Args:
            request: The request to serve

        Returns:
            The selected elevator, or None if the fleet is empty
        """
        for elevator in self._elevators:
            if elevator.is_idle:
                return elevator

        requested_direction = request.requested_direction
        same_direction = [
            elevator
            for elevator in self._elevators
            if elevator.direction == requested_direction
        ]
        if same_direction:
            return self._closest(same_direction, request.source_floor)

        return self._closest(self._elevators, request.source_floor)

    @staticmethod
    def _closest(elevators: Sequence[Elevator], floor: int) -> Optional[Elevator]:
        best_elevator = None
        best_distance = None
        for elevator in elevators:
            distance = abs(elevator.current_floor - floor)
            # strict comparison keeps the first elevator on ties
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best_elevator = elevator
        return best_elevator
