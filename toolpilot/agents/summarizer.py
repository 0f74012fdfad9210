"""
Summarizer agent.

Writes the natural-language reply once a plan has run.
"""

from __future__ import annotations

from typing import Any

from toolpilot.agents.base import BaseAgent
from toolpilot.core.audit import AuditLog
from toolpilot.llm.prompts.summary import FALLBACK_SUMMARY, SUMMARY_PROMPT
from toolpilot.models.conversation import AgentRequest
from toolpilot.models.plan import ExecutionResult
from toolpilot.utils.helpers import to_json


class SummarizerAgent(BaseAgent):
    """
    Final response agent.

    The work is already done when this runs, so a failed summary degrades
    to a generic completion message instead of failing the request.
    """

    name = "summarizer"
    description = "Natural-language summary of executed plans"

    def build_messages(
        self,
        request: AgentRequest,
        planning_messages: list[dict[str, str]],
        results: list[ExecutionResult],
    ) -> list[dict[str, str]]:
        """Planning conversation followed by the results of the run."""
        return [
            *planning_messages,
            {
                "role": "user",
                "content": SUMMARY_PROMPT.format(
                    prompt=request.prompt,
                    step_count=len(results),
                    results_json=to_json([result.to_wire() for result in results], indent=2),
                ),
            },
        ]

    async def run(
        self,
        request: AgentRequest,
        planning_messages: list[dict[str, str]] | None = None,
        results: list[ExecutionResult] | None = None,
        audit: AuditLog | None = None,
        **kwargs: Any,
    ) -> str:
        """
        Ask the model to summarize the executed results.

        Args:
            request: The inbound request
            planning_messages: Messages sent to the planner
            results: Results of the executed plan
            audit: Audit log for the request

        Returns:
            The summary text
        """
        audit = audit or AuditLog()
        messages = self.build_messages(request, planning_messages or [], results or [])

        audit.add("Generating final response with conversation context...")
        try:
            reply = await self._send(messages, self.config.summary_max_tokens, audit)
        except Exception as e:
            audit.warning(f"Summary generation failed, using generic response: {e}")
            return FALLBACK_SUMMARY

        if reply.content_type != "text" or not reply.text.strip():
            audit.warning("Summary was not text, using generic response")
            return FALLBACK_SUMMARY

        return reply.text
