"""
End-to-end tests for the Orchestrator with fake model and transport.
"""

import pytest

from toolpilot.core.orchestrator import Orchestrator
from toolpilot.llm.prompts.summary import FALLBACK_SUMMARY
from toolpilot.models.conversation import AgentRequest
from toolpilot.models.outcome import GENERIC_ERROR

from tests.conftest import FakeTransport, RateLimited, make_response, plan_json


def _factory(transport):
    async def factory(config):
        return transport

    return factory


@pytest.fixture
def transport(sample_tools):
    return FakeTransport(
        tools=sample_tools,
        schemas={"content_items.list": {"type": "object", "properties": {"page": {}, "pageSize": {}}}},
        results={"content_items.list": {"content": [{"type": "text", "text": "5 items"}]}},
    )


class TestOrchestratorSuccess:
    """Happy paths."""

    @pytest.mark.asyncio
    async def test_list_top_items(self, config, make_client, transport):
        client, completion = make_client(
            plan_json(("content_items.list", {"page": 1, "pageSize": 5})),
            "Here are your top 5 items.",
        )
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="list the top 5 items"))

        assert outcome.success
        assert transport.calls == [("content_items.list", {"page": 1, "pageSize": 5})]
        assert transport.closed

        response = outcome.to_response()
        assert response["success"] is True
        assert response["actionPlan"] == [{
            "tool": "content_items.list",
            "parameters": {"page": 1, "pageSize": 5},
            "reasoning": "use content_items.list",
        }]
        assert response["results"] == [{"content": [{"type": "text", "text": "5 items"}], "isError": False}]
        assert response["response"] == "Here are your top 5 items."
        assert response["modelUsed"] == "anthropic/claude-test"
        assert outcome.status_code == 200

        logs = response["logs"]
        assert logs[0] == "Connecting to MCP server..."
        assert 'Prompt received: "list the top 5 items"' in logs
        assert "Conversation history length: 0" in logs
        assert "Action plan parsed successfully with 1 steps" in logs
        assert logs[-1] == "Execution completed successfully"

        assert len(completion.calls) == 2
        assert completion.calls[0]["max_tokens"] == 4096
        assert completion.calls[1]["max_tokens"] == 512

    @pytest.mark.asyncio
    async def test_planning_prompt_contents(self, config, make_client, transport):
        client, completion = make_client(plan_json(("content_items.list", {})), "ok")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        await orchestrator.run({
            "prompt": "rename this page",
            "pageContext": {"pageInfo": {"id": "page-42"}},
        })

        prompt = completion.calls[0]["messages"][-1]["content"]
        assert "- content_items.list: List content items (page, pageSize)" in prompt
        assert "current page ID: page-42" in prompt
        assert "rename this page" in prompt

    @pytest.mark.asyncio
    async def test_history_is_capped(self, config, make_client, transport):
        history = [
            {"role": "user" if i % 2 == 0 else "assistant", "content": f"message {i}"}
            for i in range(12)
        ]
        client, completion = make_client(plan_json(("content_items.list", {})), "ok")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run({"prompt": "continue", "conversationHistory": history})

        planning = completion.calls[0]["messages"]
        assert len(planning) == 11
        assert planning[0] == {"role": "user", "content": "message 2"}
        assert "Added 10 previous messages to context" in outcome.logs
        assert "Conversation history length: 12" in outcome.logs

        summary = completion.calls[1]["messages"]
        assert summary[:11] == planning
        assert "continue" in summary[-1]["content"]

    @pytest.mark.asyncio
    async def test_fallback_plan_on_unparseable_output(self, config, make_client, transport):
        client, _ = make_client("Sorry, I am not sure what you mean.", "Listed items.")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run({
            "prompt": "do something",
            "pageContext": {"pageInfo": {"id": "home"}},
        })

        assert outcome.success
        assert transport.calls == [
            ("content_items.list", {"page": 1, "pageSize": 10, "itemId": "home"}),
        ]
        assert "Creating fallback plan..." in outcome.logs
        assert any(e.startswith("Error parsing model plan") for e in outcome.logs)

    @pytest.mark.asyncio
    async def test_fallback_plan_without_page(self, config, make_client, transport):
        client, _ = make_client("not json", "ok")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        await orchestrator.run(AgentRequest(prompt="anything"))

        assert transport.calls == [("content_items.list", {"page": 1, "pageSize": 10})]

    @pytest.mark.asyncio
    async def test_truncated_plan_is_recovered(self, config, make_client, transport):
        truncated = (
            '[{"tool": "content_items.list", "parameters": {"page": 1}, "reasoning": "a"},'
            ' {"tool": "content_items.get", "parameters": {"id": '
        )
        client, _ = make_client(make_response(truncated, finish_reason="length"), "ok")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="list then get"))

        assert outcome.success
        assert [a.tool for a in outcome.plan] == ["content_items.list"]
        assert "Warning: model response may be truncated due to token limit" in outcome.logs

    @pytest.mark.asyncio
    async def test_summary_failure_uses_generic_reply(self, config, make_client, transport):
        client, _ = make_client(plan_json(("content_items.list", {})), ValueError("model down"))
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="list"))

        assert outcome.success
        assert outcome.summary == FALLBACK_SUMMARY

    @pytest.mark.asyncio
    async def test_close_error_does_not_fail_request(self, config, make_client, sample_tools):
        transport = FakeTransport(tools=sample_tools, close_error=RuntimeError("pipe closed"))
        client, _ = make_client(plan_json(("content_items.list", {})), "ok")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="list"))

        assert outcome.success
        assert "Error closing MCP client: pipe closed" in outcome.logs


class TestOrchestratorFailure:
    """Failure paths always produce a failed outcome and release the transport."""

    @pytest.mark.asyncio
    async def test_unknown_tool_fails(self, config, make_client, transport):
        client, completion = make_client(plan_json(("content_items.delete_all", {})))
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="delete everything"))

        assert not outcome.success
        assert transport.closed
        assert transport.calls == []
        assert len(completion.calls) == 1

        response = outcome.to_response()
        assert response["error"] == GENERIC_ERROR
        assert response["details"] == "Tool not available: content_items.delete_all"
        assert "Executing step 1/1: content_items.delete_all" in response["logs"]
        assert outcome.status_code == 500

    @pytest.mark.asyncio
    async def test_step_error_fails(self, config, make_client, sample_tools):
        transport = FakeTransport(
            tools=sample_tools,
            results={"content_items.get": {"content": [], "isError": True}},
        )
        client, _ = make_client(plan_json(
            ("content_items.list", {}),
            ("content_items.get", {"id": "1"}),
            ("content_items.update", {"id": "1"}),
        ))
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="update item 1"))

        assert not outcome.success
        assert [name for name, _ in transport.calls] == ["content_items.list", "content_items.get"]
        assert "Error in step 2" in outcome.details
        assert transport.closed

    @pytest.mark.asyncio
    async def test_connect_error(self, config, make_client):
        async def factory(config):
            raise OSError("npx not found")

        client, completion = make_client()
        orchestrator = Orchestrator(config, client=client, transport_factory=factory)

        outcome = await orchestrator.run(AgentRequest(prompt="list"))

        assert not outcome.success
        assert outcome.details == "MCP connection failed: npx not found"
        assert outcome.logs == [
            "Connecting to MCP server...",
            "Could not connect to MCP server: MCP connection failed: npx not found",
        ]
        assert completion.calls == []

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self, config, make_client, transport, fake_sleep):
        client, _ = make_client(*[RateLimited("429") for _ in range(4)])
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run(AgentRequest(prompt="list"))

        assert not outcome.success
        assert transport.closed
        assert fake_sleep.delays == [0.5, 1.0, 2.0]
        assert sum(e.startswith("Rate limit detected") for e in outcome.logs) == 3

    @pytest.mark.asyncio
    async def test_invalid_request(self, config, make_client, transport):
        client, _ = make_client()
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        outcome = await orchestrator.run({"prompt": "   "})

        assert not outcome.success
        assert outcome.logs == []
        assert not transport.closed

    @pytest.mark.asyncio
    async def test_requests_do_not_share_state(self, config, make_client, transport):
        client, _ = make_client(
            plan_json(("content_items.list", {})), "first",
            plan_json(("content_items.list", {})), "second",
        )
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        first = await orchestrator.run(AgentRequest(prompt="one"))
        second = await orchestrator.run(AgentRequest(prompt="two"))

        assert first.summary == "first"
        assert second.summary == "second"
        assert 'Prompt received: "one"' not in second.logs


class TestOrchestratorStats:
    @pytest.mark.asyncio
    async def test_agent_call_counts(self, config, make_client, transport):
        client, _ = make_client(plan_json(("content_items.list", {})), "ok")
        orchestrator = Orchestrator(config, client=client, transport_factory=_factory(transport))

        await orchestrator.run(AgentRequest(prompt="list"))
        stats = orchestrator.get_stats()

        assert stats["planner"]["call_count"] == 1
        assert stats["summarizer"]["call_count"] == 1
        assert stats["planner"]["usage"]["model"] == "anthropic/claude-test"
        assert repr(orchestrator.planner) == "PlannerAgent(model=anthropic/claude-test)"
