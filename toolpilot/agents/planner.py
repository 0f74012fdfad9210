"""
Planner agent.

The Planner turns the user request, the recent conversation and the tool
catalog into an ordered list of tool invocations.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from toolpilot.agents.base import BaseAgent
from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import MalformedPlanError, UnsupportedContentError
from toolpilot.llm.parser import parse_plan
from toolpilot.llm.prompts.planner import FALLBACK_REASONING, PLANNER_PROMPT
from toolpilot.models.conversation import AgentRequest
from toolpilot.models.plan import PlannedAction
from toolpilot.tools.catalog import ToolCatalog


class PlanningResult(BaseModel):
    """Plan for a request plus the conversation that produced it."""

    plan: list[PlannedAction] = Field(default_factory=list)
    messages: list[dict[str, str]] = Field(default_factory=list)
    used_fallback: bool = Field(default=False)


class PlannerAgent(BaseAgent):
    """
    Plan generation agent.

    If the model output cannot be salvaged, the planner degrades to a single
    listing action instead of failing the request.

    Example:
        >>> planner = PlannerAgent(client)
        >>> result = await planner.run(request, catalog=catalog, audit=audit)
        >>> result.plan[0].tool
        "content_items.list"
    """

    name = "planner"
    description = "Execution plan generation from natural-language requests"

    def build_messages(self, request: AgentRequest, tools_description: str) -> list[dict[str, str]]:
        """
        Build the planning conversation.

        The most recent history entries come first, followed by the planning
        instructions carrying the current request.
        """
        messages = [message.to_chat() for message in request.recent_history(self.config.history_limit)]
        messages.append({
            "role": "user",
            "content": PLANNER_PROMPT.format(
                tools_description=tools_description,
                page_id=request.page_id or "unknown",
                prompt=request.prompt,
            ),
        })
        return messages

    def fallback_plan(self, request: AgentRequest) -> list[PlannedAction]:
        """A single conservative listing action, scoped to the page when known."""
        parameters: dict[str, Any] = {"page": 1, "pageSize": self.config.fallback_page_size}
        if request.page_id:
            parameters["itemId"] = request.page_id
        return [
            PlannedAction(
                tool=self.config.fallback_tool,
                parameters=parameters,
                reasoning=FALLBACK_REASONING,
            )
        ]

    async def run(
        self,
        request: AgentRequest,
        catalog: ToolCatalog | None = None,
        audit: AuditLog | None = None,
        **kwargs: Any,
    ) -> PlanningResult:
        """
        Ask the model for a plan and parse it.

        Args:
            request: The inbound request
            catalog: Tools discovered for this request
            audit: Audit log for the request

        Returns:
            PlanningResult with the plan and the planning messages
        """
        audit = audit or AuditLog()
        catalog = catalog or ToolCatalog()

        tools_description = catalog.describe_compact(
            max_tools=self.config.max_tools,
            max_chars=self.config.max_description_chars,
        )

        messages = self.build_messages(request, tools_description)
        history_count = len(messages) - 1
        if history_count:
            audit.add(f"Added {history_count} previous messages to context")

        audit.add(f"Querying {self.model} for execution plan with conversation context...")
        reply = await self._send(messages, self.config.plan_max_tokens, audit)

        try:
            if reply.content_type != "text":
                raise UnsupportedContentError(reply.content_type)

            audit.add(f"Model response received, length: {len(reply.text)} chars")
            if reply.truncated:
                audit.warning("Warning: model response may be truncated due to token limit")

            plan = parse_plan(reply.text, audit)
            audit.add(f"Action plan parsed successfully with {len(plan)} steps")
            return PlanningResult(plan=plan, messages=messages)

        except (MalformedPlanError, UnsupportedContentError) as e:
            audit.error(f"Error parsing model plan: {e}")
            audit.add("Creating fallback plan...")
            return PlanningResult(
                plan=self.fallback_plan(request),
                messages=messages,
                used_fallback=True,
            )
