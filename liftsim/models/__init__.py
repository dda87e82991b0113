"""Request and elevator models."""

from .elevator import Elevator, ElevatorStatus
from .request import Direction, Request, RequestStatus

__all__ = ["Direction", "Elevator", "ElevatorStatus", "Request", "RequestStatus"]
