import json
import logging
import os
import sys
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None):
    """
    Set up structured logging for the simulator using structlog.

    This configures the standard logging module to emit plain messages,
    then initializes structlog with processors to:
      1. Filter by level and add the logger name and log level.
      2. Format positional arguments and exception info when present.
      3. Timestamp logs in ISO format.
      4. Render final output as JSON, or as coloured console lines when
         ``LOG_FORMAT=console``.

    Call this once at startup so all modules use the same logging configuration.
    """
    root_logger = logging.getLogger()

    # Return early if already configured
    if hasattr(configure_logging, "_configured"):
        return root_logger

    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = os.getenv("LOG_FORMAT", "json").lower()

    # Remove all existing handlers to prevent duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer(sort_keys=True, serializer=json.dumps)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level, logging.INFO),
    )
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    configure_logging._configured = True
    return root_logger
