"""
Logging Configuration
Sets up the package logger for scripts and the command line.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here and nowhere else.
"""
import logging
import sys
from typing import Optional, Union


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'polysym' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, "INFO")
        log_file: Optional path to save logs to a file.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("polysym")
    logger.setLevel(level)

    # avoid duplicate handlers when called more than once
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger


__all__ = ['setup_logging']
