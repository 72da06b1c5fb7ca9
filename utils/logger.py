"""
utils/logger.py
---------------
Logging setup shared by the db and repository layers.
Modules call `get_logger(__name__)`; the root logger is configured on first use
at the level named by LOG_LEVEL.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _init_logging(level: str = LOG_LEVEL) -> None:
    """Attach a stdout handler to the root logger, once per process."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    level_no = logging.getLevelName(level)
    if not isinstance(level_no, int):
        level_no = logging.INFO
    root = logging.getLogger()
    root.setLevel(level_no)
    root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    _init_logging()
    return logging.getLogger(name)
