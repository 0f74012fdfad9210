"""Toolpilot tools package - discovery and invocation of MCP tools."""

from toolpilot.tools.catalog import ToolCatalog, describe_compact
from toolpilot.tools.inference import infer_schema, lookup_schema
from toolpilot.tools.transport import (
    ExecutionTransport,
    MCPTransport,
    probe_endpoint,
    scoped_transport,
)

__all__ = [
    "ToolCatalog",
    "describe_compact",
    "infer_schema",
    "lookup_schema",
    "ExecutionTransport",
    "MCPTransport",
    "probe_endpoint",
    "scoped_transport",
]
