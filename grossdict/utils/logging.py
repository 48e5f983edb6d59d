"""Logging setup for grossdict."""

import sys

from loguru import logger

_DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - {message}"
)
_PLAIN_FORMAT = "{message}"


def setup_logger(verbose: bool = False, debug: bool = False) -> None:
    """Configure the loguru logger.

    Removes the default sink and installs a single stderr sink whose level
    follows the verbosity flags.

    Args:
        verbose: Show INFO messages
        debug: Show DEBUG messages with source locations
    """
    logger.remove()

    if debug:
        logger.add(sys.stderr, level="DEBUG", format=_DEBUG_FORMAT)
    elif verbose:
        logger.add(sys.stderr, level="INFO", format=_PLAIN_FORMAT)
    else:
        logger.add(sys.stderr, level="WARNING", format=_PLAIN_FORMAT)
