"""Logging configuration for the CLI."""

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Route log records through rich.

    Args:
        level: Level name from config.
        verbose: Force DEBUG output.
    """
    resolved = logging.DEBUG if verbose else logging.getLevelName(level)
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
