"""Logging setup for the CLI.

Library code logs through the standard logging module; the CLI routes those
records to stderr through rich so they don't interleave with tables on
stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from hbschema.core.context import LOGGER_NAME

_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int = 0) -> None:
    """Send hbschema log records to stderr at a level chosen by verbosity."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(_LEVELS.get(verbosity, logging.DEBUG))
    logger.propagate = False
