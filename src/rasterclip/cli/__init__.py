"""Command-line interface for rasterclip.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Pixel tables with coverage for every rasterization algorithm
- Batch clipping of geometry files with progress bars
- Verbose/quiet output modes
- Detailed error reporting
"""

from rasterclip.cli.app import cli, main

__all__ = ["cli", "main"]
