"""Structured logging utilities for table rendering and progress tracking."""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any


@dataclass
class LogContext:
    """Context for correlating logs of one request or page render."""

    request_id: str | None = None
    article_id: int | None = None
    table_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def format_prefix(self) -> str:
        """Format as log prefix string."""
        parts = []
        if self.request_id:
            parts.append(f"req={self.request_id[:8]}")
        if self.article_id is not None:
            parts.append(f"article={self.article_id}")
        if self.table_id:
            parts.append(f"table={truncate(self.table_id, 40)}")
        for key, value in self.extra.items():
            parts.append(f"{key}={value}")
        return " | ".join(parts)


def truncate(text: str | None, max_length: int = 100) -> str:
    """Truncate text for logging, adding ellipsis if truncated."""
    if text is None:
        return "<none>"
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_log_dict(data: dict[str, Any]) -> str:
    """Format dictionary as key=value pairs for logging."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            parts.append(f'{key}="{truncate(value, 80)}"')
        elif isinstance(value, list | tuple):
            if len(value) <= 3:
                parts.append(f"{key}={value}")
            else:
                parts.append(f"{key}=[{value[0]}, {value[1]}, ... +{len(value)-2} more]")
        elif isinstance(value, dict):
            parts.append(f"{key}={{...{len(value)} keys}}")
        else:
            parts.append(f"{key}={value}")
    return " | ".join(parts)


class StructuredLogger:
    """Logger wrapper that adds structured context to all log messages."""

    def __init__(self, name: str, context: LogContext | None = None):
        self._logger = logging.getLogger(name)
        self._context = context or LogContext()

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_message(self, message: str, **kwargs: Any) -> str:
        prefix = self._context.format_prefix()
        if kwargs:
            extra = format_log_dict(kwargs)
            if prefix:
                return f"{prefix} | {message} | {extra}"
            return f"{message} | {extra}"
        if prefix:
            return f"{prefix} | {message}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with context and traceback."""
        self._logger.exception(self._format_message(message, **kwargs))

    def with_context(self, **kwargs: Any) -> "StructuredLogger":
        """Create new logger with additional context."""
        known = ("request_id", "article_id", "table_id")
        new_context = LogContext(
            request_id=kwargs.get("request_id", self._context.request_id),
            article_id=kwargs.get("article_id", self._context.article_id),
            table_id=kwargs.get("table_id", self._context.table_id),
            extra={**self._context.extra, **{k: v for k, v in kwargs.items() if k not in known}},
        )
        return StructuredLogger(self._logger.name, new_context)


def get_logger(name: str, context: LogContext | None = None) -> StructuredLogger:
    """Get a structured logger with optional context."""
    return StructuredLogger(name, context)


@contextmanager
def timed_operation(logger: StructuredLogger, operation: str, **kwargs: Any) -> Iterator[dict[str, Any]]:
    """Context manager for timing an operation.

    The yielded dict may be filled with extra fields to log on exit.
    """
    start = time.perf_counter()
    result: dict[str, Any] = {"success": False}
    try:
        yield result
        result["success"] = True
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        level = "info" if result["success"] else "error"
        extra = {k: v for k, v in result.items() if k != "success"}
        getattr(logger, level)(
            f"TIMED:{operation}",
            duration_ms=round(duration_ms, 1),
            success=result["success"],
            **{**kwargs, **extra},
        )
