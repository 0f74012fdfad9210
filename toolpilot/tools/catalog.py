"""
Tool catalog built fresh from the execution transport for every request.
"""

from __future__ import annotations

from typing import Iterator

from toolpilot.core.audit import AuditLog
from toolpilot.models.tools import ToolDescriptor
from toolpilot.tools.transport import ExecutionTransport
from toolpilot.utils.logger import get_logger

logger = get_logger(__name__)

DESCRIPTION_CHARS = 80
PARAMETER_HINTS = 5


def describe_compact(
    tools: list[ToolDescriptor],
    max_tools: int = 20,
    max_chars: int = 2000,
) -> str:
    """
    Render a compact tool description for the planning prompt.

    Each tool becomes ``- name: description (param, ...)`` with the
    description cut to 80 characters and at most five parameter names. Tools
    past ``max_tools`` are only counted, and the whole text is cut at
    ``max_chars`` with a trailing ``...``. The output depends only on the
    arguments.

    Args:
        tools: Tools in catalog order
        max_tools: Maximum number of tools rendered
        max_chars: Maximum length of the rendered text before the ellipsis

    Returns:
        The rendered description
    """
    parts = []
    for tool in tools[:max_tools]:
        line = f"- {tool.name}: {tool.description[:DESCRIPTION_CHARS] or 'No description'}"
        hints = tool.parameter_names[:PARAMETER_HINTS]
        if hints:
            line += f" ({', '.join(hints)})"
        parts.append(line)

    result = "\n".join(parts)
    if len(tools) > max_tools:
        result += f"\n...{len(tools) - max_tools} more tools"

    if len(result) > max_chars:
        return result[:max_chars] + "..."
    return result


class ToolCatalog:
    """
    Tools available to the current request.

    Example:
        >>> catalog = await ToolCatalog.discover(transport)
        >>> "content_items.list" in catalog
        True
        >>> print(catalog.describe_compact())
        - content_items.list: List content items (page, pageSize)
    """

    def __init__(self, tools: list[ToolDescriptor] | None = None):
        self._tools: dict[str, ToolDescriptor] = {}
        for tool in tools or []:
            self._tools.setdefault(tool.name, tool)

    @classmethod
    async def discover(
        cls,
        transport: ExecutionTransport,
        audit: AuditLog | None = None,
    ) -> "ToolCatalog":
        """
        List the transport's tools and fetch each schema in turn.

        A tool whose schema cannot be fetched is kept with no schema.

        Args:
            transport: Connected execution transport
            audit: Audit log for the request

        Returns:
            A catalog in transport order
        """
        audit = audit or AuditLog()

        audit.add("Fetching available tools from MCP server...")
        listed = await transport.list_tools()
        audit.add(f"Available tools: {len(listed)}")

        audit.add("Fetching tool schemas...")
        tools = []
        for tool in listed:
            try:
                schema = await transport.get_tool_schema(tool.name)
            except Exception as e:
                audit.warning(f"Could not get schema for {tool.name}: {e}")
                schema = None
            tools.append(tool.with_schema(schema))

        return cls(tools)

    def get(self, name: str) -> ToolDescriptor | None:
        """Get a tool by exact name."""
        return self._tools.get(name)

    @property
    def tools(self) -> list[ToolDescriptor]:
        """All tools in discovery order."""
        return list(self._tools.values())

    @property
    def names(self) -> list[str]:
        """All tool names in discovery order."""
        return list(self._tools.keys())

    def describe_compact(self, max_tools: int = 20, max_chars: int = 2000) -> str:
        """Render this catalog with ``describe_compact``."""
        return describe_compact(self.tools, max_tools=max_tools, max_chars=max_chars)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.tools)
