"""Logging setup shared by every modelgen module.

Modules call :func:`get_logger` with ``__name__``; the CLI calls
:func:`setup_logging` once to attach a rich handler to the package logger.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "modelgen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the ``modelgen`` namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.WARNING, console: Optional[Console] = None
) -> logging.Logger:
    """
    Configure the package logger with a rich handler.

    Calling it again replaces the previously installed handler, so the CLI
    can be invoked several times in one process (tests do this).

    Args:
        level: Log level name or number
        console: Console to log to (defaults to stderr)

    Returns:
        The configured ``modelgen`` logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_modelgen_handler", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._modelgen_handler = True

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
