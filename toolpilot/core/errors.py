"""
Error taxonomy for Toolpilot.

Every fatal condition is a ``ToolpilotError`` so the orchestrator can turn it
into a structured failure response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolpilot.models.plan import ExecutionResult


class ToolpilotError(Exception):
    """Base class for all Toolpilot errors."""


class TransientUpstreamError(ToolpilotError):
    """The model provider kept rate limiting until retries ran out."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class MalformedPlanError(ToolpilotError):
    """The model output could not be turned into a plan."""


class UnsupportedContentError(ToolpilotError):
    """The model replied with something other than text."""

    def __init__(self, content_type: str):
        super().__init__(f"Unsupported content type: {content_type}")
        self.content_type = content_type


class ExecutorError(ToolpilotError):
    """A plan step failed; ``results`` holds the steps completed before it."""

    def __init__(self, message: str, results: list[ExecutionResult] | None = None):
        super().__init__(message)
        self.results = list(results or [])


class ToolNotFoundError(ExecutorError):
    """A plan step names a tool the catalog does not contain."""

    def __init__(self, tool: str, step: int, results: list[ExecutionResult] | None = None):
        super().__init__(f"Tool not available: {tool}", results)
        self.tool = tool
        self.step = step


class ToolExecutionError(ExecutorError):
    """A tool invocation raised or reported ``isError``."""

    def __init__(
        self,
        tool: str,
        step: int,
        reason: str,
        results: list[ExecutionResult] | None = None,
    ):
        super().__init__(f"Error executing tool {tool}: {reason}", results)
        self.tool = tool
        self.step = step
        self.reason = reason


class TransportConnectError(ToolpilotError):
    """The execution transport session could not be established."""
