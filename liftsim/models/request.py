"""
Request model for the elevator simulator.

A request is a pick-up at ``source_floor`` followed by a drop-off at
``destination_floor``. Floors are validated against the configured range
whenever they are assigned, so a ``Request`` instance is always valid.
"""

import enum
from datetime import datetime
from typing import Optional

from liftsim.exceptions import RequestStateError, ValidationError

DEFAULT_MIN_FLOOR = 1
DEFAULT_MAX_FLOOR = 10


class RequestStatus(str, enum.Enum):
    """Possible states of an elevator request."""

    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"


class Direction(str, enum.Enum):
    """Travel direction of a request or an elevator."""

    UP = "UP"
    DOWN = "DOWN"
    NONE = "NONE"


class Request:
    """
    Pick-up/drop-off request.

    Attributes:
        id: Identifier of the request
        source_floor: Floor where the passenger is picked up
        destination_floor: Floor where the passenger is dropped off
        created_at: When the request was created
        status: PENDING until the dispatcher assigns it, then ASSIGNED
    """

    def __init__(
        self,
        request_id: str,
        source_floor: int,
        destination_floor: int,
        min_floor: int = DEFAULT_MIN_FLOOR,
        max_floor: int = DEFAULT_MAX_FLOOR,
        created_at: Optional[datetime] = None,
    ):
        self._id = str(request_id)
        self.min_floor = min_floor
        self.max_floor = max_floor
        self.source_floor = source_floor
        self.destination_floor = destination_floor
        self.created_at = created_at or datetime.now()
        self.status = RequestStatus.PENDING

    @property
    def id(self) -> str:
        return self._id

    @property
    def source_floor(self) -> int:
        return self._source_floor

    @source_floor.setter
    def source_floor(self, value: int) -> None:
        self._source_floor = self._validate_floor("source_floor", value)

    @property
    def destination_floor(self) -> int:
        return self._destination_floor

    @destination_floor.setter
    def destination_floor(self, value: int) -> None:
        self._destination_floor = self._validate_floor("destination_floor", value)

    def _validate_floor(self, field: str, value: int) -> int:
        if value < self.min_floor or value > self.max_floor:
            raise ValidationError(field, value, self.min_floor, self.max_floor)
        return value

    @property
    def requested_direction(self) -> Direction:
        """Direction of travel from the source floor to the destination floor."""
        if self.destination_floor > self.source_floor:
            return Direction.UP
        if self.destination_floor < self.source_floor:
            return Direction.DOWN
        return Direction.NONE

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def mark_assigned(self) -> None:
        """
        Move the request from PENDING to ASSIGNED.

        Raises:
            RequestStateError: If the request was already assigned
        """
        if self.status != RequestStatus.PENDING:
            raise RequestStateError(f"Request {self.id} is already {self.status.value}")
        self.status = RequestStatus.ASSIGNED

    def to_dict(self) -> dict:
        """
        Convert request to a dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "id": self.id,
            "source_floor": self.source_floor,
            "destination_floor": self.destination_floor,
            "created_at": self.created_at.isoformat(),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        min_floor: int = DEFAULT_MIN_FLOOR,
        max_floor: int = DEFAULT_MAX_FLOOR,
    ) -> "Request":
        """
        Create a Request from a dictionary.

        Floors are re-validated against ``min_floor``/``max_floor``. Values
        coming from a Redis stream are strings, so they are coerced.

        Args:
            data: Dictionary containing request data
            min_floor: Lowest valid floor
            max_floor: Highest valid floor

        Returns:
            New Request instance

        Raises:
            ValidationError: If a floor is out of range
        """
        created_at = data.get("created_at")
        request = cls(
            request_id=data["id"],
            source_floor=int(data["source_floor"]),
            destination_floor=int(data["destination_floor"]),
            min_floor=min_floor,
            max_floor=max_floor,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
        if data.get("status"):
            request.status = RequestStatus(data["status"])
        return request

    def __str__(self) -> str:
        return f"[Request {self.id}]-[From {self.source_floor} To {self.destination_floor}]"

    def __repr__(self) -> str:
        return (
            f"Request(id={self.id!r}, source_floor={self.source_floor}, "
            f"destination_floor={self.destination_floor}, status={self.status.value})"
        )
