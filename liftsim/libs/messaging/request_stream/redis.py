"""
Redis Streams implementation of the request stream client interface.
"""

import logging
import os
from typing import Any, Dict, List, Optional, cast

from redis.asyncio import Redis

from liftsim.channels import ELEVATOR_REQUESTS_STREAM
from liftsim.exceptions import ValidationError
from liftsim.models.request import DEFAULT_MAX_FLOOR, DEFAULT_MIN_FLOOR, Request

from .base import RequestStreamClient
from .exceptions import RequestStreamPublishError, RequestStreamReadError

logger = logging.getLogger(__name__)


class RedisRequestStream(RequestStreamClient):
    """Request stream stored in a Redis Stream.

    Entries are written with XADD and consumed with XREAD from the last ID
    this client has seen, so only requests published after the client was
    created are delivered.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        db: int = 0,
        password: Optional[str] = None,
        stream: str = ELEVATOR_REQUESTS_STREAM,
        min_floor: int = DEFAULT_MIN_FLOOR,
        max_floor: int = DEFAULT_MAX_FLOOR,
        redis: Optional[Redis] = None,
        **kwargs: Any,
    ):
        """Initialize with Redis connection parameters or an existing client."""
        if redis is None:
            redis_host = host or os.environ.get("REDIS_HOST", "localhost")
            redis_port = port or int(os.environ.get("REDIS_PORT", 6379))
            redis = Redis(
                host=redis_host,
                port=redis_port,
                db=db,
                password=password,
                decode_responses=True,
                **kwargs,
            )
        self.redis = redis
        self.stream = stream
        self.min_floor = min_floor
        self.max_floor = max_floor
        self._last_id = "$"

    async def _resolve_last_id(self) -> str:
        # "$" only means "new entries" for blocking reads, pin it to the tail
        if self._last_id == "$":
            entries = await self.redis.xrevrange(self.stream, count=1)
            self._last_id = entries[0][0] if entries else "0-0"
        return self._last_id

    async def publish(self, request: Request) -> str:
        """Publish a request to the Redis Stream."""
        await self._resolve_last_id()
        payload: Dict[str, Any] = request.to_dict()
        try:
            message_id = await self.redis.xadd(self.stream, cast(Dict[Any, Any], payload))
        except Exception as e:
            logger.error("Failed to publish to stream '%s': %s", self.stream, str(e))
            raise RequestStreamPublishError(str(e)) from e
        logger.debug(
            "Request published to stream '%s' with message ID: %s",
            self.stream,
            message_id,
        )
        return message_id

    async def read(self, count: Optional[int] = None) -> List[Request]:
        """Read requests added to the stream since the last read."""
        last_id = await self._resolve_last_id()
        try:
            messages = await self.redis.xread(streams={self.stream: last_id}, count=count)
        except Exception as e:
            logger.error("Failed to read from stream '%s': %s", self.stream, str(e))
            raise RequestStreamReadError(str(e)) from e

        requests: List[Request] = []
        for _stream_name, entries in messages or []:
            for message_id, data in entries:
                self._last_id = message_id
                try:
                    requests.append(
                        Request.from_dict(data, self.min_floor, self.max_floor)
                    )
                except (KeyError, ValueError, ValidationError) as e:
                    logger.error(
                        "Discarding invalid request entry %s on stream '%s': %s",
                        message_id,
                        self.stream,
                        str(e),
                    )
        return requests

    async def close(self) -> None:
        """Close the Redis connection."""
        await self.redis.aclose()
