"""
Test configuration and fixtures.

Fakes for the model provider and the execution transport; nothing here
touches the network or spawns processes.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest

from toolpilot.llm.client import LLMClient
from toolpilot.models.config import LLMConfig, ToolpilotConfig
from toolpilot.models.plan import ExecutionResult
from toolpilot.models.tools import ToolDescriptor


def make_response(text: str | None, finish_reason: str = "stop", tool_calls: Any = None):
    """Build an object shaped like a LiteLLM chat completion response."""
    message = SimpleNamespace(content=text, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason=finish_reason)],
        usage=None,
    )


class RateLimited(Exception):
    """Provider error carrying HTTP status 429."""

    status_code = 429


class FakeCompletion:
    """
    Scripted stand-in for ``litellm.acompletion``.

    Each call consumes the next script entry: exceptions are raised, strings
    become text replies, anything else is returned as-is.
    """

    def __init__(self, *script: Any):
        self.script = list(script)
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, **kwargs: Any):
        self.calls.append(kwargs)
        if not self.script:
            raise AssertionError("FakeCompletion called more times than scripted")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, str):
            return make_response(item)
        return item


class FakeSleep:
    """Records requested backoff delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeTransport:
    """
    In-memory execution transport.

    ``results`` maps tool names to the raw result returned by ``call_tool``;
    a list value is consumed one entry per call. Exceptions are raised.
    """

    def __init__(
        self,
        tools: list[ToolDescriptor] | None = None,
        schemas: dict[str, Any] | None = None,
        results: dict[str, Any] | None = None,
        close_error: Exception | None = None,
    ):
        self.tools = tools or []
        self.schemas = schemas or {}
        self.results = results or {}
        self.close_error = close_error
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    async def list_tools(self) -> list[ToolDescriptor]:
        return list(self.tools)

    async def get_tool_schema(self, name: str) -> dict[str, Any]:
        schema = self.schemas.get(name, {"type": "object", "properties": {}})
        if isinstance(schema, BaseException):
            raise schema
        return schema

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ExecutionResult:
        self.calls.append((name, arguments))
        raw = self.results.get(name, {"content": [{"type": "text", "text": "ok"}]})
        if isinstance(raw, list):
            raw = raw.pop(0)
        if isinstance(raw, BaseException):
            raise raw
        return ExecutionResult.from_raw(raw)

    async def close(self) -> None:
        self.closed = True
        if self.close_error:
            raise self.close_error


def plan_json(*steps: tuple[str, dict[str, Any]]) -> str:
    """Render a plan as the model would return it."""
    return json.dumps([
        {"tool": tool, "parameters": params, "reasoning": f"use {tool}"}
        for tool, params in steps
    ])


@pytest.fixture
def llm_config():
    """LLM configuration with a fixed key so no environment lookup matters."""
    return LLMConfig(provider="anthropic", model="claude-test", api_key="test-key", max_retries=3)


@pytest.fixture
def config(llm_config):
    """Full configuration built without reading files."""
    return ToolpilotConfig(llm=llm_config)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def make_client(llm_config, fake_sleep):
    """Factory for an LLMClient driven by a scripted completion."""

    def _make(*script: Any) -> tuple[LLMClient, FakeCompletion]:
        completion = FakeCompletion(*script)
        return LLMClient(llm_config, completion=completion, sleep=fake_sleep), completion

    return _make


@pytest.fixture
def list_tool():
    """The standard content listing tool."""
    return ToolDescriptor(name="content_items.list", description="List content items")


@pytest.fixture
def sample_tools(list_tool):
    return [
        list_tool,
        ToolDescriptor(name="content_items.get", description="Get a content item"),
        ToolDescriptor(name="content_items.update", description="Update a content item"),
    ]
