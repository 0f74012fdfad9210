"""
Rich panels for Toolpilot CLI.

Provides styled panels for displaying plans, tools and request outcomes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from toolpilot.utils.helpers import to_json, truncate_string

if TYPE_CHECKING:
    from toolpilot.models.outcome import RequestOutcome
    from toolpilot.models.plan import PlannedAction
    from toolpilot.models.tools import ToolDescriptor


def create_plan_table(
    plan: list["PlannedAction"],
    completed: int | None = None,
) -> Table:
    """
    Create a table listing plan steps.

    Args:
        plan: Planned actions in execution order
        completed: Number of steps that ran successfully (all when None)

    Returns:
        Rich Table with one row per step
    """
    completed = len(plan) if completed is None else completed

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("#", width=3)
    table.add_column("Tool", style="tool")
    table.add_column("Parameters", overflow="fold")
    table.add_column("Reasoning", style="dim", overflow="ellipsis")

    for index, action in enumerate(plan, start=1):
        marker = "[green]✓[/]" if index <= completed else "[dim]-[/]"
        table.add_row(
            f"{marker}{index}",
            action.tool,
            truncate_string(to_json(action.parameters), 60),
            truncate_string(action.reasoning, 60),
        )

    return table


def create_tools_table(tools: list["ToolDescriptor"], title: str = "MCP Tools") -> Table:
    """
    Create a table listing discovered tools.

    Args:
        tools: Tools in discovery order
        title: Table title

    Returns:
        Rich Table with one row per tool
    """
    table = Table(title=title, show_header=True)
    table.add_column("Name", style="bold")
    table.add_column("Parameters")
    table.add_column("Description")

    for tool in tools:
        params = ", ".join(tool.parameter_names) or "[dim]-[/]"
        table.add_row(tool.name, params, truncate_string(tool.description, 60))

    return table


def create_outcome_panel(outcome: "RequestOutcome", show_logs: bool = False) -> Panel:
    """
    Create a panel displaying a request outcome.

    Args:
        outcome: Outcome of the request
        show_logs: Include the full audit log

    Returns:
        Rich Panel with the reply or the error
    """
    content = []

    if outcome.success:
        if outcome.plan:
            content.append(create_plan_table(outcome.plan, completed=len(outcome.results)))
            content.append(Text())
        content.append(Markdown(outcome.summary))
        title = "[bold green]Done[/]"
        border = "green"
    else:
        content.append(Text.from_markup(f"[bold]Error:[/] {outcome.error}"))
        content.append(Text(outcome.details or "", style="red"))
        title = "[bold red]Failed[/]"
        border = "red"

    if show_logs and outcome.logs:
        content.append(Text())
        content.append(Text("Log:", style="bold"))
        for entry in outcome.logs:
            content.append(Text(f"  {entry}", style="dim"))

    return Panel(
        Group(*content),
        title=title,
        subtitle=f"[dim]{outcome.model_used}[/]" if outcome.model_used else None,
        border_style=border,
    )
