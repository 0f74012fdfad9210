"""
CLI UI components for Toolpilot.

This module provides rich terminal UI components including:
- Banner display
- Styled messages
- Plan, tool and outcome panels
"""

from toolpilot.cli.ui.console import (
    console,
    show_banner,
    print_error,
    print_warning,
    print_info,
)
from toolpilot.cli.ui.panels import (
    create_plan_table,
    create_tools_table,
    create_outcome_panel,
)

__all__ = [
    # Console
    "console",
    "show_banner",
    "print_error",
    "print_warning",
    "print_info",
    # Panels
    "create_plan_table",
    "create_tools_table",
    "create_outcome_panel",
]
