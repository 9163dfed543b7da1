"""Command-line interface for shapetap.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Seeded, reproducible scenes
- Hit testing a tap against a scene
- SVG export with an optional selection
- Quiet output mode
"""

from shapetap.cli.app import cli, main

__all__ = ["cli", "main"]
