"""structlog configuration shared by the API and scripts."""

import logging
import sys
from typing import Optional

import structlog


def configure_logging(level: str = "INFO", log_format: str = "json", stream=None) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Minimum log level name
        log_format: ``json`` for JSON lines, anything else for console output
        stream: Output stream, stderr by default
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Optional[object] = None) -> None:
    """Configure logging from a ``Settings`` instance (the global one by default)."""
    if settings is None:
        from ..config import settings
    configure_logging(settings.log_level, settings.log_format)
