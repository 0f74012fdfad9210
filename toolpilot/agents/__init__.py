"""
AI agents for Toolpilot.

- PlannerAgent: turns a request into an ordered tool plan
- SummarizerAgent: writes the reply after the plan ran
"""

from toolpilot.agents.base import BaseAgent
from toolpilot.agents.planner import PlannerAgent, PlanningResult
from toolpilot.agents.summarizer import SummarizerAgent

__all__ = [
    "BaseAgent",
    "PlannerAgent",
    "PlanningResult",
    "SummarizerAgent",
]
