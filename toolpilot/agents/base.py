"""
Base agent class.

Agents wrap one model round-trip each: the planner asks for a plan and the
summarizer asks for the final reply. They share the request's LLM client so
usage is tracked in one place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from toolpilot.core.audit import AuditLog
from toolpilot.llm.client import LLMClient, ModelReply
from toolpilot.models.config import PlanningConfig
from toolpilot.models.conversation import AgentRequest


class BaseAgent(ABC):
    """
    Base class for the model-facing agents.

    Example:
        >>> class EchoAgent(BaseAgent):
        ...     async def run(self, request, **kwargs):
        ...         reply = await self._send([{"role": "user", "content": request.prompt}], 64)
        ...         return reply.text
    """

    # Agent metadata (set by subclasses)
    name: str = "base"
    description: str = "Base agent"

    def __init__(self, client: LLMClient, config: PlanningConfig | None = None):
        """
        Initialize the agent.

        Args:
            client: Model gateway shared by the request
            config: Planning configuration
        """
        self.client = client
        self.config = config or PlanningConfig()

        # Tracking
        self.call_count = 0

    @property
    def model(self) -> str:
        """Model string used for every call."""
        return self.client.model_string

    @abstractmethod
    async def run(self, request: AgentRequest, **kwargs: Any) -> Any:
        """
        Run the agent for a request.

        Args:
            request: The inbound request
            **kwargs: Agent-specific arguments
        """

    async def _send(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        audit: AuditLog | None = None,
    ) -> ModelReply:
        """Send messages through the gateway and count the call."""
        reply = await self.client.send(messages, max_tokens=max_tokens, audit=audit)
        self.call_count += 1
        return reply

    def get_stats(self) -> dict[str, Any]:
        """
        Get agent statistics.

        Returns:
            Dictionary with call count and token usage
        """
        return {
            "agent": self.name,
            "call_count": self.call_count,
            "usage": self.client.get_usage_stats(),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model})"
