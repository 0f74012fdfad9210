"""Toolpilot LLM package - model gateway and plan parsing."""

from toolpilot.llm.client import LLMClient, ModelReply, is_rate_limit_error
from toolpilot.llm.parser import parse_plan

__all__ = [
    "LLMClient",
    "ModelReply",
    "is_rate_limit_error",
    "parse_plan",
]
