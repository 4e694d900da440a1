"""Structured Logging — JSON formatter, setup, and the injectable ContextLogger.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (context, error) surfaced when present
    - JSON format in production, human-readable in development
    - Errors are sanitized before emission: stack traces only in development
    - debug() is a no-op outside development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
    - ContextLogger constructed explicitly and injected (app.state + Depends), not a module singleton
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any

from stockroom.core.domain_types import Environment


_EXTRA_FIELDS = ("context", "error")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable single line: [timestamp] LEVEL: message | Context: {...}."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).isoformat()
        line = f"[{timestamp}] {record.levelname}: {record.getMessage()}"
        context = record.__dict__.get("context")
        if context:
            line += f" | Context: {json.dumps(context, default=str)}"
        error = record.__dict__.get("error")
        if error:
            line += f" | Error: {json.dumps(error, default=str)}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def sanitize_error(error: Any, include_stack: bool = False) -> dict:
    """Reduce an error to a log-safe dict; the stack is attached only on request."""
    if isinstance(error, BaseException):
        sanitized: dict[str, Any] = {
            "name": type(error).__name__,
            "message": str(error),
        }
        if include_stack and error.__traceback__ is not None:
            sanitized["stack"] = "".join(traceback.format_exception(error))
        cause = getattr(error, "cause", None) or error.__cause__
        if isinstance(cause, BaseException) and cause is not error:
            sanitized["cause"] = sanitize_error(cause, include_stack)
        return sanitized
    if isinstance(error, (dict, list, tuple, set)) or hasattr(error, "__dict__"):
        return {"type": "unknown_error", "value": str(error)}
    return {"type": type(error).__name__, "value": str(error)}


class ContextLogger:
    """Structured logger handed to route handlers and repositories.

    Every call takes a message plus keyword context; errors are sanitized
    according to the environment it was built for.
    """

    def __init__(
        self,
        logger: logging.Logger,
        environment: Environment = Environment.DEVELOPMENT,
    ):
        self._logger = logger
        self.environment = environment

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def error(self, message: str, error: Any = None, **context: Any) -> None:
        extra: dict[str, Any] = {"context": context or None}
        if error is not None:
            extra["error"] = sanitize_error(
                error, include_stack=self.is_development,
            )
        self._logger.error(message, extra=extra)

    def warn(self, message: str, **context: Any) -> None:
        self._logger.warning(message, extra={"context": context or None})

    def info(self, message: str, **context: Any) -> None:
        self._logger.info(message, extra={"context": context or None})

    def debug(self, message: str, **context: Any) -> None:
        if self.is_development:
            self._logger.debug(message, extra={"context": context or None})

    def database(
        self, operation: str, error: Any = None, **context: Any,
    ) -> None:
        """Database operation: error level when it failed, debug otherwise."""
        message = f"Database operation: {operation}"
        if error is not None:
            self.error(message, error, operation=operation, **context)
        else:
            self.debug(message, operation=operation, **context)

    def api(
        self, method: str, endpoint: str, error: Any = None, **context: Any,
    ) -> None:
        """API request outcome: error level when it failed, info otherwise."""
        message = f"API {method} {endpoint}"
        if error is not None:
            self.error(
                message, error, method=method, endpoint=endpoint, **context,
            )
        else:
            self.info(message, method=method, endpoint=endpoint, **context)
