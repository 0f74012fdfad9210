"""
Command-line interface for Toolpilot.
"""

from toolpilot.cli.app import app, main

__all__ = ["app", "main"]
