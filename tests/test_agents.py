"""
Tests for the planner and summarizer agents.
"""

import pytest

from toolpilot.agents.planner import PlannerAgent
from toolpilot.agents.summarizer import SummarizerAgent
from toolpilot.core.audit import AuditLog
from toolpilot.llm.prompts.summary import FALLBACK_SUMMARY
from toolpilot.models.config import PlanningConfig
from toolpilot.models.conversation import AgentRequest
from toolpilot.models.plan import ExecutionResult
from toolpilot.tools.catalog import ToolCatalog

from tests.conftest import make_response, plan_json


class TestPlannerAgent:
    """Tests for PlannerAgent."""

    def test_build_messages_unknown_page(self, make_client):
        client, _ = make_client()
        planner = PlannerAgent(client)

        messages = planner.build_messages(AgentRequest(prompt="hello"), "- a: b")

        assert len(messages) == 1
        assert messages[0]["role"] == "user"
        assert "current page ID: unknown" in messages[0]["content"]
        assert "- a: b" in messages[0]["content"]

    def test_history_limit_from_config(self, make_client):
        client, _ = make_client()
        planner = PlannerAgent(client, PlanningConfig(history_limit=2))
        request = AgentRequest(
            prompt="next",
            conversation_history=[
                {"role": "user", "content": "one"},
                {"role": "assistant", "content": "two"},
                {"role": "user", "content": "three"},
            ],
        )

        messages = planner.build_messages(request, "")

        assert [m["content"] for m in messages[:2]] == ["two", "three"]

    def test_custom_fallback(self, make_client):
        client, _ = make_client()
        planner = PlannerAgent(client, PlanningConfig(fallback_tool="items.browse", fallback_page_size=3))

        plan = planner.fallback_plan(AgentRequest(prompt="x"))

        assert plan[0].tool == "items.browse"
        assert plan[0].parameters == {"page": 1, "pageSize": 3}

    @pytest.mark.asyncio
    async def test_plan_parsed(self, make_client):
        client, _ = make_client(plan_json(("a", {"q": 1}), ("b", {})))
        planner = PlannerAgent(client)
        audit = AuditLog()

        result = await planner.run(AgentRequest(prompt="go"), catalog=ToolCatalog(), audit=audit)

        assert [a.tool for a in result.plan] == ["a", "b"]
        assert not result.used_fallback
        assert planner.call_count == 1
        assert "Querying anthropic/claude-test for execution plan with conversation context..." in audit.entries

    @pytest.mark.asyncio
    async def test_non_text_reply_uses_fallback(self, make_client):
        client, _ = make_client(make_response(None, tool_calls=[{"id": "1"}]))
        planner = PlannerAgent(client)
        audit = AuditLog()

        result = await planner.run(AgentRequest(prompt="go"), audit=audit)

        assert result.used_fallback
        assert result.plan[0].tool == "content_items.list"
        assert "Error parsing model plan: Unsupported content type: tool_use" in audit.entries


class TestSummarizerAgent:
    """Tests for SummarizerAgent."""

    def test_build_messages_embeds_results(self, make_client):
        client, _ = make_client()
        summarizer = SummarizerAgent(client)
        results = [ExecutionResult(payload={"content": [{"type": "text", "text": "done"}]})]

        messages = summarizer.build_messages(
            AgentRequest(prompt="list"),
            [{"role": "user", "content": "plan please"}],
            results,
        )

        assert messages[0] == {"role": "user", "content": "plan please"}
        assert '"isError": false' in messages[1]["content"]
        assert '"text": "done"' in messages[1]["content"]

    @pytest.mark.asyncio
    async def test_returns_model_text(self, make_client):
        client, _ = make_client("All done.")
        summary = await SummarizerAgent(client).run(AgentRequest(prompt="x"), results=[])
        assert summary == "All done."

    @pytest.mark.asyncio
    async def test_blank_reply_uses_generic(self, make_client):
        client, _ = make_client("   ")
        audit = AuditLog()

        summary = await SummarizerAgent(client).run(AgentRequest(prompt="x"), audit=audit)

        assert summary == FALLBACK_SUMMARY
        assert len(audit) == 2
