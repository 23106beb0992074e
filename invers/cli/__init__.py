"""CLI commands for Invers Wealth.

This package provides the command-line interface: the daily planner,
monthly reports, portfolio dashboard, and reminder settings.
"""

from invers.cli.main import cli, main

__all__ = ["cli", "main"]
