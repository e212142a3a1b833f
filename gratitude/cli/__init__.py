"""CLI commands for Gratitude.

This package provides the command-line interface: journal entries,
streak views, data import/export, prompts and spaces.
"""

from gratitude.cli.main import cli, main

__all__ = ["cli", "main"]
