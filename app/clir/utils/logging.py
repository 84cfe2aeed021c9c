"""Logging setup for the CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
CLI attaches a single Rich handler to the ``clir`` logger at startup.
"""

import logging

from rich.logging import RichHandler

from clir.utils.formatting import err_console

LOGGER_NAME = "clir"

# -v count to level; more than three -v still means DEBUG
_VERBOSITY_LEVELS: dict[int, int] = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level."""
    return _VERBOSITY_LEVELS.get(min(max(verbosity, 0), 3), logging.ERROR)


def setup_logging(verbosity: int = 0) -> logging.Logger:
    """Configure the ``clir`` logger for console output.

    Calling this again replaces the previously installed handler.

    Args:
        verbosity: Number of ``-v`` flags given on the command line.

    Returns:
        The configured ``clir`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = level_for_verbosity(verbosity)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = RichHandler(
        console=err_console,
        show_time=verbosity >= 3,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
