"""
Configuration commands for Toolpilot CLI.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(help="Configuration management")
console = Console()


@app.command("show")
def config_show(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to show",
    ),
):
    """Show current configuration."""
    from toolpilot.models.config import ToolpilotConfig

    try:
        config = ToolpilotConfig.load(config_file)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    transport_cmd = " ".join([config.transport.command, *config.transport.args])
    console.print(
        Panel.fit(
            f"[bold]LLM Configuration:[/]\n"
            f"  Provider: {config.llm.provider}\n"
            f"  Model: {config.llm.model}\n"
            f"  Temperature: {config.llm.temperature}\n"
            f"  Max Retries: {config.llm.max_retries}\n"
            f"  API Key: {'Set' if config.llm.get_api_key() else '[red]Not Set[/]'}\n"
            f"\n[bold]MCP Transport:[/]\n"
            f"  Command: {transport_cmd}\n"
            f"  Startup Timeout: {config.transport.startup_timeout}s\n"
            f"  Probe URL: {config.transport.probe_url or '[dim]-[/]'}\n"
            f"\n[bold]Planning:[/]\n"
            f"  History Limit: {config.planning.history_limit}\n"
            f"  Plan Max Tokens: {config.planning.plan_max_tokens}\n"
            f"  Summary Max Tokens: {config.planning.summary_max_tokens}\n"
            f"  Fallback Tool: {config.planning.fallback_tool}\n"
            f"\n[bold]Logging:[/]\n"
            f"  Level: {config.logging.level}\n"
            f"  File: {config.logging.file or '[dim]console only[/]'}",
            title="[bold blue]Toolpilot Configuration[/]",
        )
    )


@app.command("init")
def config_init(
    config_file: str = typer.Option(
        "toolpilot.yaml",
        "--output",
        "-o",
        help="Output file path",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file without asking",
    ),
):
    """Initialize a new configuration file."""
    from toolpilot.models.config import ToolpilotConfig

    config_path = Path(config_file)

    if config_path.exists() and not force:
        overwrite = typer.confirm(f"{config_file} already exists. Overwrite?")
        if not overwrite:
            console.print("[yellow]Cancelled[/]")
            return

    ToolpilotConfig().save(config_path)

    console.print(f"[green]Configuration saved to {config_file}[/]")
    console.print("\n[bold]Next steps:[/]")
    console.print("1. Set your API key:")
    console.print("   [dim]export ANTHROPIC_API_KEY=your-key-here[/]")
    console.print("\n2. Ask something:")
    console.print('   [dim]toolpilot ask "list the top 5 items"[/]')


@app.command("env")
def config_env():
    """Show environment variables for configuration."""
    from toolpilot.models.config import SUPPORTED_PROVIDERS

    table = Table(title="Environment Variables", show_header=True)
    table.add_column("Variable", style="bold")
    table.add_column("Description")
    table.add_column("Status")

    for provider in SUPPORTED_PROVIDERS.values():
        var = provider.get("env_key")
        if not var:
            continue
        status = "[green]Set[/]" if os.environ.get(var) else "[dim]Not Set[/]"
        table.add_row(var, f"{provider['name']} API key", status)

    settings = [
        ("TOOLPILOT_LLM__PROVIDER", "LLM provider"),
        ("TOOLPILOT_LLM__MODEL", "Model name"),
        ("TOOLPILOT_LLM__MAX_RETRIES", "Retries on rate limiting"),
        ("TOOLPILOT_TRANSPORT__COMMAND", "MCP server command"),
        ("TOOLPILOT_TRANSPORT__PROBE_URL", "Connectivity probe endpoint"),
        ("TOOLPILOT_TRANSPORT__PROBE_API_KEY", "Connectivity probe API key"),
        ("TOOLPILOT_PLANNING__HISTORY_LIMIT", "History messages sent to the model"),
        ("TOOLPILOT_LOGGING__LEVEL", "Log level"),
    ]
    for var, description in settings:
        status = "[green]Set[/]" if os.environ.get(var) else "[dim]Not Set[/]"
        table.add_row(var, description, status)

    console.print(table)


@app.command("probe")
def config_probe(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use",
    ),
    url: str = typer.Option(
        None,
        "--url",
        "-u",
        help="Endpoint to probe (defaults to transport.probe_url)",
    ),
):
    """Check that the content endpoint answers."""
    from toolpilot.models.config import ToolpilotConfig
    from toolpilot.tools.transport import probe_endpoint

    try:
        config = ToolpilotConfig.load(config_file)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    target = url or config.transport.probe_url
    if not target:
        console.print("[red]No probe URL configured.[/]")
        console.print("Set transport.probe_url or pass --url.")
        raise typer.Exit(1)

    console.print(f"Probing [bold]{target}[/]...")
    ok = asyncio.run(probe_endpoint(target, api_key=config.transport.probe_api_key))

    if ok:
        console.print("[green]Endpoint is reachable[/]")
    else:
        console.print("[red]Endpoint did not answer successfully[/]")
        raise typer.Exit(1)


@app.command("test-llm")
def config_test_llm(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use",
    ),
):
    """Test the model connection with a simple prompt."""
    from toolpilot.llm.client import LLMClient
    from toolpilot.models.config import ToolpilotConfig

    try:
        config = ToolpilotConfig.load(config_file)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    if not config.llm.is_configured():
        console.print(f"[red]LLM provider '{config.llm.provider}' is not configured.[/]")
        console.print(f"Set {config.llm.provider.upper()}_API_KEY environment variable.")
        raise typer.Exit(1)

    client = LLMClient(config.llm)
    console.print(f"Testing connection to [bold]{config.llm.provider}[/]...")
    console.print(f"Model: [cyan]{client.model_string}[/]")

    try:
        reply = asyncio.run(
            client.send([{"role": "user", "content": "Say 'Hello' in one word."}], max_tokens=10)
        )
    except Exception as e:
        console.print(f"[red]LLM connection failed: {e}[/]")
        raise typer.Exit(1)

    console.print(f"\n[green]Success![/] LLM responded: [cyan]{reply.text.strip()}[/]")
    console.print(f"Tokens used: {client.get_usage_stats().get('total_tokens', 'N/A')}")
