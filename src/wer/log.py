"""Logging setup for the wer command line."""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "wer"


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Send ``wer.*`` log records to stderr through rich.

    Safe to call more than once; the handler is installed only once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
