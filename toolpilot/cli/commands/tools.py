"""
Tool inspection commands for Toolpilot CLI.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from toolpilot.utils.helpers import to_json

app = typer.Typer(help="Inspect MCP tools")
console = Console()


async def fetch_catalog(config_file: str | None = None):
    """Connect to the MCP server and discover its tools."""
    from toolpilot.models.config import ToolpilotConfig
    from toolpilot.tools.catalog import ToolCatalog
    from toolpilot.tools.transport import scoped_transport

    config = ToolpilotConfig.load(config_file)
    async with scoped_transport(config.transport) as transport:
        return await ToolCatalog.discover(transport)


def _load_catalog(config_file: str | None):
    from toolpilot.core.errors import TransportConnectError

    try:
        return asyncio.run(fetch_catalog(config_file))
    except (TransportConnectError, FileNotFoundError) as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


@app.command("list")
def tools_list(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use",
    ),
    compact: bool = typer.Option(
        False,
        "--compact",
        help="Show the description sent to the model instead of a table",
    ),
):
    """List the tools exposed by the MCP server."""
    from toolpilot.cli.ui.panels import create_tools_table

    catalog = _load_catalog(config_file)

    if compact:
        console.print(catalog.describe_compact(), markup=False, highlight=False)
        return

    console.print(create_tools_table(catalog.tools))
    console.print(f"\n[dim]Total: {len(catalog)}[/]")


@app.command("describe")
def tools_describe(
    tool_name: str = typer.Argument(..., help="Tool name"),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use",
    ),
):
    """Show the schema of a tool."""
    catalog = _load_catalog(config_file)

    tool = catalog.get(tool_name)
    if not tool:
        console.print(f"[red]Tool '{tool_name}' not found[/]")
        raise typer.Exit(1)

    schema = Syntax(to_json(tool.input_schema, indent=2), "json", word_wrap=True)
    console.print(
        Panel(
            schema,
            title=f"[bold]{tool.name}[/]",
            subtitle=tool.description or None,
        )
    )
