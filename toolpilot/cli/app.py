"""
Main CLI application.

This module defines the main Typer application and entry point.
"""

from __future__ import annotations

import os
from typing import Optional

import typer
from rich.console import Console

from toolpilot import __version__
from toolpilot.cli.commands import config, tools

# Create the main app
app = typer.Typer(
    name="toolpilot",
    help="LLM-driven action plans for MCP tools",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Add sub-commands
app.add_typer(tools.app, name="tools", help="Inspect MCP tools")
app.add_typer(config.app, name="config", help="Configuration management")

console = Console()


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Toolpilot[/] v{__version__}")
        raise typer.Exit()


class CLIState:
    """Global CLI state for options like quiet, debug, color."""

    quiet: bool = False
    debug: bool = False
    no_color: bool = False


cli_state = CLIState()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-essential output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
):
    """
    Toolpilot - LLM-driven action plans for MCP tools

    Sends a natural-language request to a language model, which plans a
    sequence of MCP tool calls; Toolpilot runs the plan and asks the model
    to summarize what happened.
    """
    cli_state.quiet = quiet
    cli_state.debug = debug
    cli_state.no_color = no_color

    if no_color:
        os.environ["NO_COLOR"] = "1"

    if debug:
        from toolpilot.utils.logger import setup_logging

        setup_logging("debug")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Natural-language request"),
    page_id: Optional[str] = typer.Option(
        None,
        "--page-id",
        "-p",
        help="Identifier of the page the request is about",
    ),
    history: Optional[str] = typer.Option(
        None,
        "--history",
        "-H",
        help="JSON file holding the conversation history (updated after the run)",
    ),
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the wire-format response as JSON",
    ),
    show_logs: bool = typer.Option(
        False,
        "--logs",
        "-l",
        help="Show the execution log",
    ),
):
    """
    Plan and run MCP tool calls for a request.

    Example:
        toolpilot ask "list the top 5 items"
        toolpilot ask "rename this page to Home" --page-id 1234 --history chat.json
    """
    from toolpilot.cli.commands.ask import run_ask

    run_ask(
        prompt=prompt,
        page_id=page_id,
        history_file=history,
        config_file=config_file,
        json_output=json_output,
        show_logs=show_logs,
        quiet=cli_state.quiet,
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
