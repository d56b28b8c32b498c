"""Logging configuration for the SearXNG MCP launcher.

Sets up human-readable (optionally colored) or JSON structured logging on
stderr. Stdout is left alone because the command-line entry point writes the
launch descriptor there.
"""

import json
import logging
import sys
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

from .config import get_config_instance

logger = logging.getLogger(__name__)

# Internal guard to prevent double configuration when setup_logging() is called repeatedly
_LOGGING_CONFIGURED = False

# LogRecord attributes that are not user supplied ``extra`` fields
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "message",
        "asctime",
    }
)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}


class ColoredFormatter(logging.Formatter):
    """Colored formatter for human-readable logs."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.COLORS.get(record.levelname, "") if self.use_colors else ""
        reset_color = self.COLORS["RESET"] if self.use_colors else ""

        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%d %H:%M:%S")
        message = record.getMessage()

        # Only include short scalar extras to keep lines readable
        extra_fields = [
            f"{key}={value}"
            for key, value in _extra_fields(record).items()
            if value is not None and isinstance(value, (str, int, float, bool)) and len(str(value)) < 100
        ]

        log_line = f"{timestamp} - {level_color}{record.levelname}{reset_color} - {record.name} - {message}"
        if extra_fields:
            log_line += f" | {' '.join(extra_fields)}"

        if record.exc_info:
            exc_info = traceback.format_exception(*record.exc_info)
            log_line += f"\n{level_color}Exception:{reset_color}\n" + "".join(exc_info)

        return log_line


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type = record.exc_info[0]
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type is not None else "Unknown",
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        log_data.update(_extra_fields(record))
        return json.dumps(log_data, default=str)


def setup_logging(force: bool = False) -> None:
    """Set up logging according to the launcher configuration."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED and not force:
        return

    config = get_config_instance()

    use_colors = config.environment == "development"
    formatter = JSONFormatter() if config.log_format == "json" else ColoredFormatter(use_colors=use_colors)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level))
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    logger.debug(
        "Logging configured",
        extra={
            "log_level": config.log_level,
            "log_format": config.log_format,
            "environment": config.environment,
        },
    )
    _LOGGING_CONFIGURED = True
