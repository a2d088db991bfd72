"""Terminal output for the scratch tool.

stdout is left to the editor and to plain answers such as ``--version``.
Progress logs and fatal error reports both go to ``stderr_console``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
stderr_console = Console(stderr=True)

LOGGER_NAME = "rubberduck"


def setup_logging(level: str | int = logging.INFO, verbose: bool = False) -> logging.Logger:
    """Attach a Rich stderr handler to the ``rubberduck`` logger and return it.

    Unknown level names fall back to INFO; ``verbose`` forces DEBUG.
    """
    if verbose:
        numeric_level = logging.DEBUG
    elif isinstance(level, str):
        numeric_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    else:
        numeric_level = level

    handler = RichHandler(
        console=stderr_console,
        markup=True,
        show_path=False,
        show_time=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)
