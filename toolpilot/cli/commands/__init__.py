"""CLI commands package."""

from toolpilot.cli.commands import ask, config, tools

__all__ = ["ask", "config", "tools"]
