"""
Random request source.

Generates requests on a fixed interval and accepts manually submitted
ones. Both are delivered through the same request stream.
"""

import asyncio
import random
from typing import Optional

import structlog

from liftsim.libs.messaging.request_stream import RequestStreamClient
from liftsim.models.request import DEFAULT_MAX_FLOOR, DEFAULT_MIN_FLOOR, Request

logger = structlog.get_logger(__name__)


class RandomRequestSource:
    """Timer-driven producer of random requests."""

    def __init__(
        self,
        stream: RequestStreamClient,
        interval_ms: int = 5000,
        min_floor: int = DEFAULT_MIN_FLOOR,
        max_floor: int = DEFAULT_MAX_FLOOR,
        rng: Optional[random.Random] = None,
    ):
        self.stream = stream
        self.interval_ms = interval_ms
        self.min_floor = min_floor
        self.max_floor = max_floor
        self._random = rng or random.Random()
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start generating requests. Must be called from a running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._generate_forever())
        logger.info("request_source_started", interval_ms=self.interval_ms)

    async def stop(self) -> None:
        """Stop generating requests and wait for the timer task to finish."""
        if not self.is_running:
            return
        task = self._task
        self._task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("request_source_stopped")

    def generate_request(self) -> Request:
        """Build a request with random floors and a random 4-digit id."""
        source_floor = self._random.randint(self.min_floor, self.max_floor)
        destination_floor = self._random.randint(self.min_floor, self.max_floor)
        request_id = str(self._random.randint(1000, 9999))
        return Request(
            request_id,
            source_floor,
            destination_floor,
            min_floor=self.min_floor,
            max_floor=self.max_floor,
        )

    async def submit_manual_request(self, request: Request) -> str:
        """Publish an externally built request on the request stream."""
        message_id = await self.stream.publish(request)
        logger.info(
            "manual_request_submitted",
            request_id=request.id,
            source_floor=request.source_floor,
            destination_floor=request.destination_floor,
        )
        return message_id

    async def _generate_forever(self) -> None:
        while True:
            await asyncio.sleep(self.interval_ms / 1000)
            try:
                request = self.generate_request()
                await self.stream.publish(request)
            except Exception as e:
                logger.error("request_generation_failed", error=str(e), exc_info=True)
                continue
            logger.debug(
                "request_generated",
                request_id=request.id,
                source_floor=request.source_floor,
                destination_floor=request.destination_floor,
            )
