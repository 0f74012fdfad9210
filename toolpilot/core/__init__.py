"""
Core package.

This package contains the request-scoped building blocks: the audit log,
the error taxonomy and the plan executor. The orchestrator that composes
them lives in ``toolpilot.core.orchestrator``.
"""

from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import (
    ToolpilotError,
    TransientUpstreamError,
    MalformedPlanError,
    UnsupportedContentError,
    ExecutorError,
    ToolNotFoundError,
    ToolExecutionError,
    TransportConnectError,
)

__all__ = [
    "AuditLog",
    "ToolpilotError",
    "TransientUpstreamError",
    "MalformedPlanError",
    "UnsupportedContentError",
    "ExecutorError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "TransportConnectError",
]
