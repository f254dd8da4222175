"""Logging configuration using structlog."""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars


def setup_logging(debug: bool = False) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output. If False, use JSON for production.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Set library log levels to reduce noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


def bind_actor_context(actor_id: UUID, role: str, email: str | None = None) -> None:
    """Bind the acting profile to all subsequent log calls.

    Args:
        actor_id: The caller's profile ID.
        role: The caller's role (manager or consultant).
        email: Optional email for additional context.
               Only logged if settings.log_user_emails is True (GDPR compliance).
    """
    from src.applypath.core.config import get_settings

    bind_contextvars(
        actor_id=str(actor_id),
        actor_role=role,
    )
    settings = get_settings()
    if email and settings.log_user_emails:
        bind_contextvars(actor_email=email)


def clear_actor_context() -> None:
    """Clear all actor-scoped context."""
    clear_contextvars()
