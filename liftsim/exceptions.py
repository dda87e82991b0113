"""Exceptions for the elevator simulator."""


class LiftSimError(Exception):
    """Base exception for all simulator errors."""

    pass


class ValidationError(LiftSimError, ValueError):
    """Raised when a request floor falls outside the configured floor range."""

    def __init__(self, field: str, value: int, min_floor: int, max_floor: int):
        self.field = field
        self.value = value
        self.min_floor = min_floor
        self.max_floor = max_floor
        super().__init__(
            f"{field} should be between {min_floor} and {max_floor}, got {value}."
        )


class RequestStateError(LiftSimError):
    """Raised on an invalid request status transition."""

    pass


class ConfigurationError(LiftSimError):
    """Raised when the startup configuration cannot be loaded or is invalid."""

    pass


__all__ = [
    "LiftSimError",
    "ValidationError",
    "RequestStateError",
    "ConfigurationError",
]
