"""
Structured logging configuration using structlog.

Colored console output while developing, JSON lines everywhere else.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from procurement.config.settings import Settings, get_settings


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp every event with the service identity."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _renderer_chain(settings: Settings) -> list[Processor]:
    if settings.environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger."""
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_app_context,
    ]

    structlog.configure(
        processors=shared_processors + _renderer_chain(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    # aiosqlite logs every statement at DEBUG
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
