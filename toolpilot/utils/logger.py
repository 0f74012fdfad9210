"""
Structured logging for Toolpilot.

Provides a consistent logging interface with support for:
- Multiple log levels
- Structured JSON logging
- Console and file output
- Rich formatting for console
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(str, Enum):
    """Log levels for Toolpilot."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def numeric(self) -> int:
        """Get numeric log level."""
        levels = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
            "critical": logging.CRITICAL,
        }
        return levels.get(self.value, logging.INFO)


def get_logger(name: str = "toolpilot") -> logging.Logger:
    """
    Get a logger inside the ``toolpilot`` hierarchy.

    Handlers live on the root ``toolpilot`` logger and child loggers
    propagate to it. Until ``setup_logging`` runs, first use attaches a
    stderr ``RichHandler`` that shows warnings and above.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    if name != "toolpilot" and not name.startswith("toolpilot."):
        name = f"toolpilot.{name}"

    root = logging.getLogger("toolpilot")
    if not root.handlers:
        root.addHandler(_rich_handler(logging.WARNING))

    return logging.getLogger(name)


def _rich_handler(level: int) -> RichHandler:
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_file: str | Path | None = None,
    json_format: bool = False,
    console: bool = True,
) -> None:
    """
    Set up logging configuration for Toolpilot.

    Args:
        level: Minimum log level
        log_file: Optional file path for log output
        json_format: Use JSON format for file logs
        console: Enable console output
    """
    if isinstance(level, str):
        level = LogLevel(level.lower())

    root = logging.getLogger("toolpilot")
    root.setLevel(level.numeric)
    root.handlers.clear()

    if console:
        root.addHandler(_rich_handler(level.numeric))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        if json_format:
            file_handler.setFormatter(JsonFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
            ))

        file_handler.setLevel(level.numeric)
        root.addHandler(file_handler)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)
