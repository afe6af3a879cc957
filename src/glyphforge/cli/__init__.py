"""Command-line interface for glyphforge.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- vectorize: one image to a sanitized SVG outline
- build: a directory of images to a TrueType font, in parallel
- import: an existing font back to editable SVGs
"""

from glyphforge.cli.app import cli, main

__all__ = ["cli", "main"]
