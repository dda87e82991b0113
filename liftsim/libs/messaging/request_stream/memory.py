"""
In-process request stream backed by an asyncio queue.
"""

import asyncio
import itertools
import logging
from typing import List, Optional

from liftsim.models.request import Request

from .base import RequestStreamClient
from .exceptions import RequestStreamClosedError

logger = logging.getLogger(__name__)


class MemoryRequestStream(RequestStreamClient):
    """Unbounded single-producer/single-consumer queue of requests."""

    def __init__(self) -> None:
        self._queue: "asyncio.Queue[Request]" = asyncio.Queue()
        self._ids = itertools.count(1)
        self._closed = False

    async def publish(self, request: Request) -> str:
        if self._closed:
            raise RequestStreamClosedError("Cannot publish to a closed stream")
        self._queue.put_nowait(request)
        message_id = str(next(self._ids))
        logger.debug("Request %s queued with message ID: %s", request.id, message_id)
        return message_id

    async def read(self, count: Optional[int] = None) -> List[Request]:
        requests: List[Request] = []
        while not self._queue.empty() and (count is None or len(requests) < count):
            requests.append(self._queue.get_nowait())
        return requests

    async def close(self) -> None:
        self._closed = True

    def __len__(self) -> int:
        return self._queue.qsize()
