"""
Centralized logging configuration for Goblin Store.

Usage:
    from goblin_store.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart hydrated")

Every record carries the (truncated) session id of the request being served,
so all cart writes of one browser can be followed in the logs.
"""

import logging
import os
import sys
from contextvars import ContextVar
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(session)s] %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - [%(session)s] %(message)s"

# Set by SessionCookieMiddleware for the duration of a request
current_session: ContextVar[str | None] = ContextVar("current_session", default=None)


def _escape_log_injection(value: str) -> str:
    """Escape newlines and control characters that could forge log entries (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Sanitize an identifier (session id, cookie value) for logging.

    Keeps only the first 8 characters so full session tokens never reach the logs.
    """
    if not id_value:
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[:8] if len(safe_value) > 8 else safe_value


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Sanitize user-controlled text (product names, form input) for logging."""
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


class SessionContextFilter(logging.Filter):
    """Adds ``record.session``: the current request's session id, or "-" outside requests."""

    def filter(self, record: logging.LogRecord) -> bool:
        session_id = current_session.get()
        record.session = sanitize_id_for_logging(session_id) if session_id else "-"
        return True


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(SessionContextFilter())
    is_production = os.environ.get("GOBLIN_ENV") == "production"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT))
    root.addHandler(handler)

    # Every Redis call is an HTTP request; keep the client chatter out
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "SessionContextFilter",
    "current_session",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
