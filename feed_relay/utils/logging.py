"""Logging setup for the relay process.

Logs go to stdout in a single text format. uvicorn installs its own handlers
for the ``uvicorn.*`` loggers once it starts serving; this only covers the
startup phase and everything outside those loggers.
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name (e.g. "DEBUG") or numeric value

    Raises:
        ValueError: if ``level`` is not a known logging level
    """
    if isinstance(level, str):
        level = level.upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
