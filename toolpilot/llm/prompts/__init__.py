"""Prompt templates for AI agents."""

from toolpilot.llm.prompts.planner import PLANNER_PROMPT, FALLBACK_REASONING
from toolpilot.llm.prompts.summary import SUMMARY_PROMPT, FALLBACK_SUMMARY

__all__ = [
    "PLANNER_PROMPT",
    "FALLBACK_REASONING",
    "SUMMARY_PROMPT",
    "FALLBACK_SUMMARY",
]
