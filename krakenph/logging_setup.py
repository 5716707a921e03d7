"""Logging configuration for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route krakenph logs to stderr through rich.
    
    Args:
        verbose: Log at DEBUG instead of WARNING.
        console: Console to write to, defaults to a stderr console.
        
    Returns:
        The package logger.
    """
    logger = logging.getLogger("krakenph")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
