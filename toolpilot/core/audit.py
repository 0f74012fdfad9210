"""
Per-request audit log.
"""

from __future__ import annotations

import logging
from typing import Iterator

from toolpilot.utils.logger import get_logger


class AuditLog:
    """
    Append-only narrative of one request.

    Entries are never reordered or filtered and are returned verbatim to the
    caller. Each entry is mirrored to the ``toolpilot`` logger at the given
    level.

    Example:
        >>> audit = AuditLog()
        >>> audit.add("Prompt received")
        >>> audit.entries
        ['Prompt received']
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._entries: list[str] = []
        self._logger = logger or get_logger("toolpilot.audit")

    def add(self, message: str, level: int = logging.INFO) -> None:
        """Append an entry."""
        self._entries.append(message)
        self._logger.log(level, message)

    def warning(self, message: str) -> None:
        self.add(message, logging.WARNING)

    def error(self, message: str) -> None:
        self.add(message, logging.ERROR)

    @property
    def entries(self) -> list[str]:
        """A copy of the entries in insertion order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
