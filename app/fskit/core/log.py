"""Logging setup for the fskit CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers;
the CLI attaches a single Rich handler to the ``fskit`` logger so
messages render alongside the rest of the console output.
"""

import logging

from rich.logging import RichHandler

from fskit.utils.formatting import err_console

LOGGER_NAME = "fskit"


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Configure the fskit logger.

    Calling it again replaces the previous handler instead of adding a
    second one.

    Args:
        level: Logging level, as a number or a name like "DEBUG".

    Returns:
        The configured ``fskit`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)

    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
