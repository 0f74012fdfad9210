"""
Helper utilities for Toolpilot.
"""

from __future__ import annotations

import json
import re
from typing import Any


def truncate_string(
    text: str,
    max_length: int,
    suffix: str = "...",
) -> str:
    """
    Truncate a string to a maximum length.

    Args:
        text: Input string
        max_length: Maximum length including suffix
        suffix: Suffix to append when truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix


def to_json(value: Any, indent: int | None = None) -> str:
    """
    Serialize a value to JSON, falling back to ``str`` for unknown types.

    Pydantic models are dumped in JSON mode first.
    """
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json", by_alias=True)
    elif isinstance(value, list):
        value = [v.model_dump(mode="json", by_alias=True) if hasattr(v, "model_dump") else v for v in value]
    return json.dumps(value, indent=indent, default=str, ensure_ascii=False)


def extract_fenced_block(text: str) -> str | None:
    """
    Return the inner content of the first fenced code block, if any.

    Example:
        >>> extract_fenced_block("```json\\n[1]\\n```")
        '[1]'
    """
    match = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
    return match.group(1).strip() if match else None
