"""
Abstract base class for request stream clients.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from liftsim.models.request import Request


class RequestStreamClient(ABC):
    """Channel between request producers and the simulation loop.

    Producers call ``publish`` on their own schedule; the loop drains the
    stream once per iteration with ``read``. There is a single consumer and
    the stream is unbounded.
    """

    @abstractmethod
    async def publish(self, request: Request) -> str:
        """Publish a request to the stream.

        Args:
            request: The request to deliver

        Returns:
            The message ID of the published request
        """
        pass

    @abstractmethod
    async def read(self, count: Optional[int] = None) -> List[Request]:
        """Drain requests published since the last read without blocking.

        Args:
            count: Maximum number of requests to return, all if None

        Returns:
            Requests in publication order
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the stream resources."""
        pass
