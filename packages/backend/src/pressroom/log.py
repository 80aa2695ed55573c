"""structlog setup.

Request-scoped values (request_id) are bound through contextvars by
RequestIdMiddleware and merged into every entry here.
"""

import logging

import structlog

from pressroom.config import settings


def configure_logging() -> None:
    """Install the processor chain. Safe to call more than once."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def token_hint(token: str | None) -> str:
    """Short prefix of a token, safe to log."""
    if not token:
        return "-"
    return f"{token[:6]}…"
