"""Command-line interface for vignettify.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for chunk compositing
- Verbose/quiet output modes
- Preview-size rendering
- Dry-run mode showing the derived gradation table
"""

from vignettify.cli.app import cli, main

__all__ = ["cli", "main"]
