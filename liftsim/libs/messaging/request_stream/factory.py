from enum import Enum
from typing import Any, Dict, Optional

from .base import RequestStreamClient
from .memory import MemoryRequestStream
from .redis import RedisRequestStream


class StreamProvider(Enum):
    """Supported request stream providers."""

    MEMORY = "memory"
    REDIS = "redis"


def create_stream_client(
    provider: StreamProvider,
    config: Optional[Dict[str, Any]] = None,
) -> RequestStreamClient:
    """
    Create a request stream client for the specified provider.

    Example:
        # In-process queue
        stream = create_stream_client(StreamProvider.MEMORY)

        # Redis Streams
        stream = create_stream_client(
            StreamProvider.REDIS,
            {"host": "redis.example.com", "port": 6380, "max_floor": 20},
        )

    Returns:
        A request stream client for the specified provider

    Raises:
        ValueError: If the provider is not supported
    """
    config = config or {}

    if provider == StreamProvider.MEMORY:
        return MemoryRequestStream()
    if provider == StreamProvider.REDIS:
        return RedisRequestStream(**config)

    raise ValueError(f"Unsupported stream provider: {provider}")
