"""Logging setup for the CLI.

Library code only creates module loggers; handlers are installed here,
once, by the process entry point.  Rich is imported lazily so that
bootstrap paths (``--help``, ``--version``) never touch it.
"""

from __future__ import annotations

import logging

from yt_shaper.exceptions import EnvironmentError

LOGGER_NAME = "yt_shaper"
LOG_FORMAT = "%(name)s: %(message)s"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Route ``yt_shaper`` log records to stderr at *level*.

    Calling it again replaces the previously installed handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.addHandler(_build_handler())
    logger.setLevel(level)
