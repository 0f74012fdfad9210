"""
Toolpilot - LLM-driven action-plan orchestrator for MCP tools

Turns a natural-language request into an ordered tool execution plan using
any LiteLLM-supported model, runs the plan against a Model Context Protocol
server, and summarizes the outcome.
"""

__version__ = "0.1.0"
__author__ = "Toolpilot Team"
__license__ = "MIT"

from toolpilot.models.config import ToolpilotConfig

__all__ = [
    "__version__",
    "ToolpilotConfig",
]
