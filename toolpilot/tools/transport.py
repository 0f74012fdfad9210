"""
Execution transport.

Tools are discovered and invoked through a Model Context Protocol server
spoken to over stdio. The orchestrator only depends on the
``ExecutionTransport`` protocol, so tests and alternative hosts can plug in
their own implementation.
"""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Protocol, runtime_checkable

import httpx
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import Implementation

from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import TransportConnectError
from toolpilot.models.config import TransportConfig
from toolpilot.models.plan import ExecutionResult
from toolpilot.models.tools import ToolDescriptor
from toolpilot.tools.inference import infer_schema
from toolpilot.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ExecutionTransport(Protocol):
    """What the orchestrator needs from a tool-execution endpoint."""

    async def list_tools(self) -> list[ToolDescriptor]: ...

    async def get_tool_schema(self, name: str) -> dict[str, Any]: ...

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ExecutionResult: ...

    async def close(self) -> None: ...


TransportFactory = Callable[[TransportConfig], Awaitable[ExecutionTransport]]


class MCPTransport:
    """
    MCP stdio client owned by a single request.

    The tool list is fetched once at connect time and served from memory
    afterwards, so schema lookups do not round-trip to the server.

    Example:
        >>> transport = await MCPTransport.connect(TransportConfig())
        >>> tools = await transport.list_tools()
        >>> await transport.close()
    """

    def __init__(self, session: ClientSession, stack: AsyncExitStack, tools: list[Any]):
        self._session = session
        self._stack = stack
        self._tools = {tool.name: tool for tool in tools}
        self._closed = False

    @classmethod
    async def connect(cls, config: TransportConfig) -> "MCPTransport":
        """
        Start the MCP server and initialize a client session.

        Raises:
            TransportConnectError: If the server cannot be started or initialized
        """
        stack = AsyncExitStack()
        params = StdioServerParameters(
            command=config.command,
            args=list(config.args),
            env=config.build_env(),
            cwd=config.cwd,
        )

        logger.info(f"Starting MCP server: {config.command} {' '.join(config.args)}")

        try:
            read_stream, write_stream = await stack.enter_async_context(stdio_client(params))
            session = await stack.enter_async_context(
                ClientSession(
                    read_stream,
                    write_stream,
                    client_info=Implementation(
                        name=config.client_name,
                        version=config.client_version,
                    ),
                )
            )
            await asyncio.wait_for(session.initialize(), timeout=config.startup_timeout)
            listed = await session.list_tools()
        except Exception as e:
            try:
                await stack.aclose()
            except Exception as close_error:
                logger.error(f"Error closing transport: {close_error}")
            raise TransportConnectError(f"MCP connection failed: {e}") from e

        logger.info("MCP client connected successfully")
        return cls(session, stack, list(listed.tools or []))

    async def list_tools(self) -> list[ToolDescriptor]:
        """List the advertised tools, without schemas."""
        return [
            ToolDescriptor(name=tool.name, description=tool.description or "")
            for tool in self._tools.values()
        ]

    async def get_tool_schema(self, name: str) -> dict[str, Any]:
        """
        Get the parameter schema for a tool.

        Falls back from ``inputSchema`` to a ``parameters`` field, and then to
        a schema inferred from the tool name.

        Raises:
            LookupError: If the tool is not advertised
        """
        tool = self._tools.get(name)
        if tool is None:
            raise LookupError(f"Tool {name} not found")

        if tool.inputSchema:
            return dict(tool.inputSchema)

        parameters = (tool.model_extra or {}).get("parameters")
        if parameters:
            return dict(parameters)

        return {
            "name": tool.name,
            "description": tool.description,
            "parameters": infer_schema(tool.name),
        }

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ExecutionResult:
        """Invoke a tool and normalize the MCP result."""
        result = await self._session.call_tool(name, arguments=arguments)
        return ExecutionResult.from_raw(
            result.model_dump(mode="json", by_alias=True, exclude_none=True)
        )

    async def close(self) -> None:
        """Shut down the session and the server process."""
        if self._closed:
            return
        self._closed = True
        await self._stack.aclose()


@asynccontextmanager
async def scoped_transport(
    config: TransportConfig,
    factory: TransportFactory | None = None,
    audit: AuditLog | None = None,
) -> AsyncIterator[ExecutionTransport]:
    """
    Acquire a transport for the duration of a block.

    The transport is closed on every exit path; a failure while closing is
    logged and never replaces the block's own outcome.
    """
    factory = factory or MCPTransport.connect
    try:
        transport = await factory(config)
    except TransportConnectError:
        raise
    except Exception as e:
        raise TransportConnectError(f"MCP connection failed: {e}") from e

    try:
        yield transport
    finally:
        try:
            await transport.close()
            logger.debug("MCP client closed successfully")
        except Exception as e:
            message = f"Error closing MCP client: {e}"
            if audit is not None:
                audit.error(message)
            else:
                logger.error(message)


async def probe_endpoint(
    url: str,
    api_key: str | None = None,
    header: str = "sc_apikey",
    timeout: float = 10.0,
) -> bool:
    """
    Check whether the configured content endpoint answers.

    Used for diagnostics only, never on the request path.

    Args:
        url: Endpoint to GET
        api_key: API key sent in ``header`` when given
        header: Header name carrying the API key
        timeout: Request timeout in seconds

    Returns:
        True if the endpoint answered with a 2xx status
    """
    if not url:
        return False

    headers = {header: api_key} if api_key else {}
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, headers=headers)
        return response.is_success
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Connection test failed: {e}")
        return False
