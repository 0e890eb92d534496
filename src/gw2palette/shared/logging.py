"""
Structured logging for gw2palette.

This module provides helper functions that record structured log entries,
including error context, for API calls and mapper operations.

The package never installs handlers on import; applications call
setup_structured_logger() when they want console or file output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from gw2palette.shared.errors import ErrorContext, PaletteMapperError

_EXTRA_FIELDS = ("error_code", "context", "operation", "duration_ms", "result_info")


class StructuredFormatter(logging.Formatter):
    """
    Formatter that renders log records as single-line JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def setup_structured_logger(
    name: str = "gw2palette",
    level: str = "INFO",
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure a logger for structured output.

    Args:
        name: Logger name (default: "gw2palette")
        level: Log level name (default: "INFO")
        log_file: Optional path of a JSON log file
        use_rich_console: Use a Rich console handler instead of JSON on stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    # Drop existing handlers so repeated setup does not duplicate output
    if logger.handlers:
        logger.handlers.clear()

    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if use_rich_console:
        handler: logging.Handler = RichHandler(
            console=_create_rich_console(),
            show_time=True,
            show_level=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            log_time_format="[%H:%M:%S]",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
    handler.setLevel(log_level)
    logger.addHandler(handler)

    # File output is always JSON
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def _context_to_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: PaletteMapperError,
    operation: str | None = None,
    additional_context: dict[str, Any] | ErrorContext | None = None,
    level: int = logging.ERROR,
) -> None:
    """
    Record a PaletteMapperError as a structured log entry.

    Args:
        logger: Logger instance
        error: The error to record
        operation: Operation name (defaults to the error context operation)
        additional_context: Extra context merged over the error context
        level: Log level (default: ERROR)
    """
    context_dict = error.context.safe_dict()
    context_dict.update(_context_to_dict(additional_context))

    logger.log(
        level,
        error.message,
        extra={
            "error_code": error.code.value,
            "context": context_dict,
            "operation": operation or error.context.operation,
        },
        exc_info=error.original_error,
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """
    Record a completed operation at DEBUG level.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Duration in milliseconds
        result_info: Summary of the result
        context: Context information
    """
    logger.debug(
        "Operation '%s' completed successfully",
        operation,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _context_to_dict(context),
        },
    )


def log_api_call(
    logger: logging.Logger,
    endpoint: str,
    method: str = "GET",
    status_code: int | None = None,
    duration_ms: float | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    """
    Record an outbound API call.

    Successful calls are logged at DEBUG, failed ones (status >= 400) at WARNING.

    Args:
        logger: Logger instance
        endpoint: Requested URL
        method: HTTP method (default: "GET")
        status_code: HTTP status code
        duration_ms: Duration in milliseconds
        context: Context information
    """
    api_context: dict[str, Any] = {
        "endpoint": endpoint,
        "method": method,
    }
    if status_code is not None:
        api_context["status_code"] = status_code
    if duration_ms is not None:
        api_context["duration_ms"] = duration_ms
    if context:
        api_context.update(context)

    level = logging.DEBUG
    message = f"API call to {endpoint}"
    if status_code is not None:
        if status_code >= 400:
            level = logging.WARNING
            message += f" failed with status {status_code}"
        else:
            message += f" succeeded with status {status_code}"

    logger.log(
        level,
        message,
        extra={
            "operation": "api_call",
            "context": api_context,
        },
    )


__all__ = [
    "StructuredFormatter",
    "log_api_call",
    "log_operation_error",
    "log_operation_success",
    "setup_structured_logger",
]
