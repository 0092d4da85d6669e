"""
utils/logger.py
---------------
Logging configuration for the account server.

`main` calls `setup_logging` once at startup. Modules obtain loggers with
`get_logger(__name__)`; if nothing has configured logging yet, the first
call applies the defaults from config.
"""

import logging
import sys
from typing import IO, Optional

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = LOG_LEVEL, stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Route all records to a single stream handler.

    Calling it again replaces the handler installed by the previous call,
    so the level or stream can be changed at runtime.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...). Unknown names fall back to INFO.
        stream: Destination, stdout by default.

    Returns:
        The installed handler.
    """
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stdout)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # psycopg2 pool chatter is only useful when debugging
    logging.getLogger("psycopg2").setLevel(logging.WARNING)
    return _handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for `name`, configuring logging on first use."""
    if _handler is None:
        setup_logging()
    return logging.getLogger(name)
