"""Command-line interface for privileged.

Provides commands for creating, validating and inspecting privilege model
files and for checking queries against them.
"""

from privileged.cli.main import cli, main

__all__ = ["cli", "main"]
