"""
Logging configuration for the command line interface. The library itself only emits records
through `loguru.logger` and never installs sinks.
"""

import sys

from loguru import logger

CONSOLE_FORMAT = ('<level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan>'
                  ' - <level>{message}</level>')


def setup_logging(level='WARNING', verbose=False):
    """
    Replaces the default loguru handler with a colored stderr handler.

    :param level: Minimum level of printed records.
    :param verbose: True to print debug records regardless of `level`.
    """
    log_level = 'DEBUG' if verbose else level
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)
    logger.debug('Logging initialized. Level: {}', log_level)
