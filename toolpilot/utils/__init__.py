"""
Utility modules for Toolpilot.

This package provides common utilities:
- logger: Structured logging
- helpers: Helper functions
"""

from toolpilot.utils.logger import (
    get_logger,
    setup_logging,
    LogLevel,
)
from toolpilot.utils.helpers import (
    truncate_string,
    to_json,
    extract_fenced_block,
)

__all__ = [
    # Logger
    "get_logger",
    "setup_logging",
    "LogLevel",
    # Helpers
    "truncate_string",
    "to_json",
    "extract_fenced_block",
]
