"""
Logging Configuration
Sets up the logger for the 'cusp' namespace. The editor picks its level from
the CUSP_LOG_LEVEL environment variable (DEBUG shows solver iterations and
point edits).
"""
import logging
import sys
from typing import Optional

from cusp.config import DEFAULT_LOG_LEVEL


def resolve_level(level: int | str) -> int:
    """Numeric level for `level`, given either as a number or a name like 'debug'."""
    if isinstance(level, int):
        return level
    levels = logging.getLevelNamesMapping()
    try:
        return levels[level.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level '{level}' (expected one of {', '.join(levels)})") from None


def setup_logging(level: int | str = DEFAULT_LOG_LEVEL, log_file: Optional[str] = None) -> None:
    """
    Configures the package logger.

    Args:
        level: Logging level, numeric (logging.DEBUG) or by name ("DEBUG")
        log_file: Optional path to save logs to a file.
    """
    level = resolve_level(level)
    logger = logging.getLogger("cusp")
    logger.setLevel(level)

    # re-initialising must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
