"""Command line interface package."""

from classical_tagger.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
