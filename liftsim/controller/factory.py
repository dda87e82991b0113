"""Factory for creating and wiring ElevatorController instances."""

from typing import Callable, Optional

import structlog

from liftsim.config.settings import ElevatorSettings
from liftsim.libs.messaging.request_stream import StreamProvider, create_stream_client
from liftsim.services.request_source import RandomRequestSource

from .controller import ElevatorController

logger = structlog.get_logger(__name__)


async def create_controller(
    settings: ElevatorSettings,
    reporter: Optional[Callable[[str], None]] = None,
) -> ElevatorController:
    """Create a controller with its request stream, request source and fleet."""
    provider = StreamProvider(settings.request_stream)
    config = {}
    if provider == StreamProvider.REDIS:
        config = {
            "host": settings.redis_host,
            "port": settings.redis_port,
            "db": settings.redis_db,
            "min_floor": settings.min_floor,
            "max_floor": settings.max_floor,
        }
    stream = create_stream_client(provider, config)
    logger.info("request_stream_created", provider=provider.value)

    source = RandomRequestSource(
        stream,
        interval_ms=settings.request_interval_ms,
        min_floor=settings.min_floor,
        max_floor=settings.max_floor,
    )
    controller = ElevatorController(
        settings, stream, request_source=source, reporter=reporter
    )
    controller.initialize_elevators()
    return controller
