"""Structured logging with correlation IDs.

This module configures structlog for JSON logging in production and
colored console output in development, with correlation ID tracking
for request tracing.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from userbase.core.config import Settings, get_settings


def new_correlation_id() -> str:
    """Generate a short correlation ID."""
    return f"cid_{uuid.uuid4().hex[:12]}"


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add a correlation ID to the log entry if the context did not bind one.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with correlation_id.
    """
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = new_correlation_id()
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry."""
    event_dict["logger"] = logger.name if hasattr(logger, "name") else "userbase"
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        settings: Optional settings instance. Loaded from the environment
            when not provided.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        rename_message_field,
    ]

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
        cache_logger = False
    else:
        renderer = structlog.processors.JSONRenderer()
        cache_logger = True

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_logger,
    )

    # Third-party libraries keep using the standard logging module
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. Defaults to 'userbase'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(name or "userbase")


def bind_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current logging context.

    Called by the request middleware with the ID taken from the
    ``X-Correlation-ID`` header or a freshly generated one.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables from the current logging context."""
    structlog.contextvars.clear_contextvars()
