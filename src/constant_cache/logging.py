"""Logging utilities for the constant cache.

This module provides standardized logging functionality for registry operations.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

# Root logger name for the package
LOGGER_NAME = "constant_cache"

_callback: Optional[LogCallback] = None


class LogLevel(int, Enum):
    """Log levels for the registry."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for registry logging."""

    CONSTANT_REGISTRY = "constant_registry"
    CONSTANT_BINDING = "constant_binding"
    IDENTIFIER = "identifier"
    CONFIG_LOADING = "config_loading"

    def __str__(self) -> str:
        return self.value


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger nested under the package logger.

    Args:
        name: Child logger name. Module paths inside the package are
            accepted as-is.

    Returns:
        The logger instance
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Install a callback that receives every registry log event.

    Args:
        callback: Function called with ``(level, event, data)``, or None to
            remove the current callback
    """
    global _callback
    _callback = callback


def _log(
    callback: LogCallback,
    level: LogLevel,
    event: LogEvent,
    data: Dict[str, Any],
) -> None:
    """Log an event with the provided callback.

    Args:
        callback: Function to call with the log data
        level: Severity level
        event: Event type
        data: Dictionary of event data
    """
    try:
        callback(level, str(event), data)
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event}, data={data}"
        )


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    get_logger().log(level, message, extra={"event": str(event), "data": data})
    if _callback is not None:
        _log(_callback, level, event, {"message": message, **data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug message for a registry event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info message for a registry event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning for a registry event."""
    _emit(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error for a registry event."""
    _emit(LogLevel.ERROR, event, message, data)
