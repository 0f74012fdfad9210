"""
Plan parser.

Turns raw model text into an ordered list of ``PlannedAction``. Models
regularly wrap JSON in markdown fences or stop mid-array when they hit the
token ceiling, so parsing is an ordered chain of strategies, each of which
returns ``None`` instead of raising. Recovery can only produce a prefix of
the intended plan, never a reordering or a superset.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

from pydantic import ValidationError

from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import MalformedPlanError
from toolpilot.models.plan import PlannedAction
from toolpilot.utils.helpers import extract_fenced_block
from toolpilot.utils.logger import get_logger

logger = get_logger(__name__)

# Complete objects followed by another object or by the closing bracket
OBJECT_BOUNDARY = re.compile(r"\{[\s\S]*?\}(?=\s*,\s*\{|\s*\])")
TRAILING_COMMA = re.compile(r",\s*$")


class _Attempt:
    """Outcome of the chain so far; remembers the last decode error."""

    def __init__(self) -> None:
        self.last_error: Exception | None = None

    def loads(self, text: str) -> Any | None:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            self.last_error = e
            return None


def candidate_text(raw_text: str) -> str:
    """Inner content of the first fenced block, else the trimmed text."""
    fenced = extract_fenced_block(raw_text)
    return fenced if fenced is not None else raw_text.strip()


def looks_truncated(text: str) -> bool:
    """An opening bracket without a closing one at the end."""
    return "[" in text and not text.strip().endswith("]")


def recover_objects(text: str, attempt: _Attempt) -> Any | None:
    """Rebuild an array from the complete ``{...}`` fragments in ``text``."""
    fragments = OBJECT_BOUNDARY.findall(text)
    if not fragments:
        return None
    logger.debug("Found %d complete objects, reconstructing array", len(fragments))
    return attempt.loads(f"[{','.join(fragments)}]")


def close_array(text: str, attempt: _Attempt) -> Any | None:
    """Drop a trailing comma and append the missing ``]``."""
    if not looks_truncated(text):
        return None
    return attempt.loads(TRAILING_COMMA.sub("", text.strip()) + "]")


def _to_actions(data: Any) -> list[PlannedAction]:
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise MalformedPlanError(f"Expected a JSON array of actions, got {type(data).__name__}")

    actions = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise MalformedPlanError(f"Plan step {index} is not an object")
        try:
            actions.append(PlannedAction.model_validate(item))
        except ValidationError as e:
            raise MalformedPlanError(f"Plan step {index} is invalid: {e.errors()[0]['msg']}") from e
    return actions


def parse_plan(raw_text: str, audit: AuditLog | None = None) -> list[PlannedAction]:
    """
    Parse model output into an ordered plan.

    Strategies, each a fallback for the previous:
    1. object-boundary recovery, when the candidate looks truncated
    2. direct parse of the candidate (fenced block or trimmed text)
    3. trailing-comma repair of a candidate missing its closing bracket

    Args:
        raw_text: Raw model output
        audit: Audit log receiving recovery notes

    Returns:
        List of planned actions in model order

    Raises:
        MalformedPlanError: If no strategy yields a valid plan
    """
    note: Callable[[str], None] = audit.add if audit is not None else logger.info
    warn: Callable[[str], None] = audit.warning if audit is not None else logger.warning

    attempt = _Attempt()
    candidate = candidate_text(raw_text or "")

    if looks_truncated(candidate):
        warn("Response appears truncated, attempting recovery...")
        data = recover_objects(candidate, attempt)
        if data is not None:
            actions = _to_actions(data)
            note(f"Reconstructed truncated plan from {len(actions)} complete objects")
            return actions

    data = attempt.loads(candidate)
    if data is not None:
        return _to_actions(data)

    data = close_array(candidate, attempt)
    if data is not None:
        actions = _to_actions(data)
        note(f"Completed unterminated plan array with {len(actions)} steps")
        return actions

    raise MalformedPlanError(f"Could not parse plan: {attempt.last_error or 'no JSON array found'}")
