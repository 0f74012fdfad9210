"""Toolpilot models package."""

from toolpilot.models.config import (
    ToolpilotConfig,
    LLMConfig,
    TransportConfig,
    PlanningConfig,
    LoggingConfig,
)
from toolpilot.models.conversation import (
    AgentRequest,
    ConversationMessage,
    PageContext,
    PageInfo,
)
from toolpilot.models.outcome import RequestOutcome
from toolpilot.models.plan import ExecutionResult, PlannedAction
from toolpilot.models.tools import ToolDescriptor

__all__ = [
    # Config
    "ToolpilotConfig",
    "LLMConfig",
    "TransportConfig",
    "PlanningConfig",
    "LoggingConfig",
    # Conversation
    "AgentRequest",
    "ConversationMessage",
    "PageContext",
    "PageInfo",
    # Plan
    "PlannedAction",
    "ExecutionResult",
    # Tools
    "ToolDescriptor",
    # Outcome
    "RequestOutcome",
]
