"""Command-line interface for imprint.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Ordered operation specs via repeated --op options
- Multi-line watermark text via repeated --line options
- Quiet output mode
- Detailed error reporting
"""

from imprint.cli.app import cli, main

__all__ = ["cli", "main"]
