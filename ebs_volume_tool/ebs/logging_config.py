"""
Logging configuration for EBS commands.

Verbosity maps to log levels: 0 WARNING, 1 INFO, 2+ DEBUG. Log output goes to
stderr so stdout stays reserved for command results.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "ebs_volume_tool"


def setup_logging(verbose: int = 0) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: Verbosity count from the -v option

    Returns:
        The configured package logger
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Prevent duplicate handlers when several commands run in one process
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    # botocore is chatty at DEBUG; only surface it at the highest verbosity
    logging.getLogger("botocore").setLevel(logging.DEBUG if verbose >= 3 else logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module."""
    return logging.getLogger(name)
