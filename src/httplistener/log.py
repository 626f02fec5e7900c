"""
=============================================================================
LOGGING SETUP
=============================================================================

Every module logs through the standard library:

    logger = logging.getLogger(__name__)     # e.g. "httplistener.server"

configure_logging() wires those loggers to output:

    CONSOLE     2026-10-19 12:00:00 [INFO] httplistener.server: ...
    LOG FILE    (2026-10-19 12:00:00) [INFO]: ...

Only two levels matter for normal operation:

    INFO    message received, peer closed the connection
    ERROR   read/write failures, undecodable input, oversized requests

Nothing in the framing or response code depends on logging being set up;
without configure_logging() the records simply go nowhere.

=============================================================================
"""

import logging
from typing import Optional


CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "(%(asctime)s) [%(levelname)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "httplistener"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure console (and optionally file) logging for the package.

    Safe to call more than once; a previously installed log file handler
    is replaced rather than duplicated.

    Args:
        level: Level name, e.g. "INFO".
        log_file: Path of a file to append log lines to.

    Returns:
        The package logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=CONSOLE_FORMAT,
        datefmt=DATE_FORMAT,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)

    for handler in list(package_logger.handlers):
        if getattr(handler, "_httplistener_file", False):
            package_logger.removeHandler(handler)
            handler.close()

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        file_handler._httplistener_file = True
        package_logger.addHandler(file_handler)

    return package_logger
