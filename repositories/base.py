"""
repositories/base.py
--------------------
Shared plumbing for repositories: provider and logger injection,
and a rollback that cannot raise.
"""

import logging
from typing import Optional

from db.connection import ConnectionProvider
from utils.logger import get_logger


class BaseRepository:
    """Base class holding the connection provider and logger."""

    def __init__(self, provider: ConnectionProvider, logger: Optional[logging.Logger] = None) -> None:
        self._provider = provider
        self._logger = logger or get_logger(type(self).__module__)

    def _rollback(self, conn) -> None:
        """Roll back the current transaction, logging instead of raising."""
        try:
            conn.rollback()
        except Exception as e:
            self._logger.warning(f"Rollback failed: {e}")
