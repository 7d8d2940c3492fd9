"""Command-line interface for sheetfont.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Glyph cell, metric and naming options
- Layer listing and dry-run modes
- Verbose/quiet output modes
- Detailed error reporting
"""

from sheetfont.cli.app import cli, main

__all__ = ["cli", "main"]
