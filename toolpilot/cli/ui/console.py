"""
Console utilities for Toolpilot CLI.

Provides styled console output, banner display, and formatting utilities.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from toolpilot import __version__


# Custom theme for Toolpilot
TOOLPILOT_THEME = Theme({
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "tool": "bold magenta",
    "step": "bold blue",
})

# Global console instance
console = Console(theme=TOOLPILOT_THEME)


BANNER = r"""
 _              _       _ _       _
| |_ ___   ___ | |_ __ (_) | ___ | |_
| __/ _ \ / _ \| | '_ \| | |/ _ \| __|
| || (_) | (_) | | |_) | | | (_) | |_
 \__\___/ \___/|_| .__/|_|_|\___/ \__|
                 |_|
"""

TAGLINE = "LLM-driven action plans for MCP tools"


def show_banner() -> None:
    """Display the Toolpilot ASCII art banner."""
    banner_text = Text(BANNER, style="bold blue")

    version_text = Text()
    version_text.append("v", style="dim")
    version_text.append(__version__, style="bold cyan")
    version_text.append(" | ", style="dim")
    version_text.append(TAGLINE, style="italic")

    console.print(banner_text)
    console.print(version_text, justify="center")
    console.print()


def print_error(message: str, prefix: str = "Error") -> None:
    """Print an error message."""
    console.print(f"[error]{prefix}:[/] {message}")


def print_warning(message: str, prefix: str = "Warning") -> None:
    """Print a warning message."""
    console.print(f"[warning]{prefix}:[/] {message}")


def print_info(message: str, prefix: str = "Info") -> None:
    """Print an info message."""
    console.print(f"[info]{prefix}:[/] {message}")
