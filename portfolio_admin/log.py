"""
Structured logging setup.

Services and routes log through ``structlog.get_logger()``; lower-level
modules use ``logging.getLogger(__name__)``. Both end up on the same stdlib
handler so a single level/format setting governs everything.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name, defaults to ``settings.log_level``
        fmt: ``json`` or ``console``, defaults to ``settings.log_format``
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    renderer_name = (fmt or settings.log_format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    if renderer_name == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
