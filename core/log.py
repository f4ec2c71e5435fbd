"""Logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def resolve_level(log_level: str, verbose: bool = False, debug: bool = False) -> int:
    """--debug beats --verbose beats LOG_LEVEL."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return getattr(logging, log_level.upper(), logging.WARNING)


def setup_logging(level: int, console: Console | None = None) -> None:
    """Route all logging through one rich handler on stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove handlers from an earlier call
    for handler in root_logger.handlers[:]:
        if isinstance(handler, RichHandler):
            root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=level <= logging.DEBUG,
        rich_tracebacks=level <= logging.DEBUG,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
