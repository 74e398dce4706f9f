"""Command-line interface for foldcut.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Scene summary and crease counts
- Verbose crease table
- Quiet mode for scripting
- Detailed error reporting
"""

from foldcut.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
