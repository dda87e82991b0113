"""
Request stream package.

Carries requests from producers (the random request source, the HTTP API)
to the simulation loop.

Basic usage:
    >>> from liftsim.libs.messaging.request_stream import StreamProvider, create_stream_client
    >>>
    >>> stream = create_stream_client(StreamProvider.MEMORY)
    >>> await stream.publish(request)
    >>> requests = await stream.read()
"""

from .base import RequestStreamClient
from .exceptions import (
    RequestStreamClosedError,
    RequestStreamError,
    RequestStreamPublishError,
    RequestStreamReadError,
)
from .factory import StreamProvider, create_stream_client
from .memory import MemoryRequestStream
from .redis import RedisRequestStream

__all__ = [
    "RequestStreamClient",
    "MemoryRequestStream",
    "RedisRequestStream",
    "StreamProvider",
    "create_stream_client",
    "RequestStreamError",
    "RequestStreamPublishError",
    "RequestStreamReadError",
    "RequestStreamClosedError",
]
