"""
Logging configuration module for marketguard.

Moderation decisions are logged to stdout, either as plain text prefixed with
the current user, conversation and business, or as one JSON object per line.
The context comes from ContextVars set through LogContext.
"""

import json
import logging
import sys
from contextvars import ContextVar, Token
from typing import Any, Optional

from marketguard.config.settings import LoggingSettings, get_settings


# Context variables for correlation IDs
context_user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)
context_conversation_id: ContextVar[Optional[str]] = ContextVar("conversation_id", default=None)
context_business_id: ContextVar[Optional[str]] = ContextVar("business_id", default=None)

_CONTEXT_FIELDS = (
    ("user_id", "user"),
    ("conversation_id", "conv"),
    ("business_id", "business"),
)


class ContextFilter(logging.Filter):
    """
    Logging filter that adds context variables to log records.

    Lets a moderation decision be correlated with the user, conversation and
    business it was made for.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record."""
        record.user_id = context_user_id.get()
        record.conversation_id = context_conversation_id.get()
        record.business_id = context_business_id.get()
        return True


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects with standard fields plus any context variables.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr, _ in _CONTEXT_FIELDS:
            value = getattr(record, attr, None)
            if value is not None:
                log_data[attr] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, ensure_ascii=False)


class ContextFormatter(logging.Formatter):
    """Text formatter that prefixes the message with the correlation context."""

    def format(self, record: logging.LogRecord) -> str:
        context = ", ".join(
            f"{short}={getattr(record, attr)}"
            for attr, short in _CONTEXT_FIELDS
            if getattr(record, attr, None) is not None
        )
        if not context:
            return super().format(record)

        # Format a copy so other handlers see the untouched record
        record = logging.makeLogRecord(record.__dict__)
        record.msg = f"[{context}] {record.msg}"
        return super().format(record)


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Install a single stdout handler on the root logger.

    Not called on import; applications call it once at startup.

    Args:
        settings: Logging settings. If None, will load from global settings.
    """
    if settings is None:
        settings = get_settings().logging

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.level)
    handler.addFilter(ContextFilter())

    if settings.json_logs:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ContextFormatter(fmt=settings.format, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.addHandler(handler)

    root_logger.info(
        "Logging configured",
        extra={
            "extra_data": {
                "level": settings.level,
                "json_logs": settings.json_logs,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LogContext:
    """
    Context manager for setting correlation IDs in logs.

    Example:
        with LogContext(user_id="u-1", conversation_id="c-9"):
            screen_fields({"message": text})
            # Logs will include user_id and conversation_id
    """

    def __init__(
        self,
        user_id: Optional[str] = None,
        conversation_id: Optional[str] = None,
        business_id: Optional[str] = None,
    ):
        self._values = (
            (context_user_id, user_id),
            (context_conversation_id, conversation_id),
            (context_business_id, business_id),
        )
        self._tokens: list[Token] = []

    def __enter__(self) -> "LogContext":
        self._tokens = [var.set(value) for var, value in self._values if value is not None]
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        for token in reversed(self._tokens):
            token.var.reset(token)
        self._tokens = []
