"""Logger construction for the command-line entry point."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "sbomscan"
TIME_FORMAT = "[%Y-%m-%dT%H:%M:%S%z]"


def build_logger(level: str = "INFO", console: Optional[Console] = None) -> logging.Logger:
    """Return the ``sbomscan`` logger writing through *console*.

    Replaces handlers left by an earlier call so repeated CLI invocations in
    one process do not duplicate output.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(
        console=console,
        show_path=False,
        log_time_format=TIME_FORMAT,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger
