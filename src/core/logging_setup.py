"""structlog on top of the standard library logging module."""

import logging
import sys
from typing import Optional

import structlog

from src.core.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install the processors once at startup. Console output by default, JSON lines if `log_json` is set."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)
