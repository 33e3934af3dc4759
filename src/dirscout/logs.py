"""Logging setup for the dirscout command line.

Library code only ever calls :func:`logging.getLogger`; handlers are
installed here, once, by the CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

TRACE = 5
NOTICE = 25

LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": NOTICE,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(NOTICE, "NOTICE")


def level_from_name(name: str) -> int:
    """Return the numeric level for ``name``, defaulting to ERROR when unrecognized."""
    return LEVELS.get(name.strip().lower(), logging.ERROR)


def configure_logging(level: str | int, *, console: Console | None = None) -> logging.Logger:
    """Route ``dirscout`` log records to stderr through Rich.

    Calling this again replaces the previously installed handler.

    Args:
        level: Level name (see :data:`LEVELS`) or numeric level.
        console: Console to write to; defaults to a stderr console.

    Returns:
        logging.Logger: The configured package logger.
    """
    numeric = level if isinstance(level, int) else level_from_name(level)
    logger = logging.getLogger("dirscout")
    for handler in list(logger.handlers):
        if getattr(handler, "_dirscout", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=numeric <= logging.DEBUG,
        rich_tracebacks=True,
    )
    handler._dirscout = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


__all__ = ["LEVELS", "NOTICE", "TRACE", "configure_logging", "level_from_name"]
