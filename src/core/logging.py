"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__)),
and Logfire captures and enriches these logs once configured. The application
embedding the session services calls ``configure_logfire()`` once at startup,
before the first operation runs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_account_context(logger, "info", "Task completed", account_id="me@example.com", xp=30)
"""

import logging

import logfire

from src.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment.

    Nothing is sent unless a token is configured; spans still work locally.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name="taskquest",
        service_version="0.1.0",
        send_to_logfire="if-token-present",
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("session_service.add_task"):
            ...
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (task_id, reward_id, xp, etc.)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)


def log_with_account_context(
    logger: logging.Logger,
    level: str,
    message: str,
    account_id: str | None = None,
    **extra: object,
) -> None:
    """Log a message tagged with the account whose state is being changed."""
    context = {"account_id": account_id, **extra} if account_id else extra
    log_with_context(logger, level, message, **context)
