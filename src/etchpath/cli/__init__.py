"""Command-line interface for etchpath.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Raster and stencil etch modes
- Run time estimate before export
- Verbose/quiet output modes
- Detailed error reporting
"""

from etchpath.cli.app import cli

__all__ = ["cli"]
