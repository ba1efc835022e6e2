"""
Logging setup: structlog over stdlib logging, with per-request context
"""

import logging
import secrets
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Route structlog through stdlib logging on stdout.

    Args:
        debug: Console output at DEBUG level. Otherwise one JSON object per line.
        level: Level name used when not in debug (defaults to INFO)
    """
    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelNamesMapping().get((level or "INFO").upper(), logging.INFO)

    # aiosqlite traces every call at DEBUG
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(operation: str | None = None) -> str:
    """Start a fresh log context for one request and return its id.

    Every log line emitted while handling the request carries ``request_id``,
    plus ``graphql_operation`` when the operation name is known.
    """
    clear_contextvars()
    request_id = secrets.token_urlsafe(9)
    bind_contextvars(request_id=request_id)
    if operation is not None:
        bind_contextvars(graphql_operation=operation)
    return request_id


def current_request_id() -> str | None:
    return get_contextvars().get("request_id")


def clear_request_context() -> None:
    clear_contextvars()
