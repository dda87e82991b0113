"""Exceptions for the request stream."""


class RequestStreamError(Exception):
    """Base exception for request stream errors."""

    pass


class RequestStreamPublishError(RequestStreamError):
    """Raised when a request cannot be published."""

    pass


class RequestStreamReadError(RequestStreamError):
    """Raised when requests cannot be read from the stream."""

    pass


class RequestStreamClosedError(RequestStreamError):
    """Raised when attempting to use a closed stream."""

    pass


__all__ = [
    "RequestStreamError",
    "RequestStreamPublishError",
    "RequestStreamReadError",
    "RequestStreamClosedError",
]
