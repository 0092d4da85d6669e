"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.

Services never touch a global pool: they receive a ConnectionProvider
and borrow connections through `scoped_connection`, which guarantees
the connection is released on every exit path.
"""

from contextlib import contextmanager
from typing import Iterator, Protocol

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from exceptions import ConnectionUnavailableError, PoolExhaustedError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionProvider(Protocol):
    """Anything that hands out exclusive, releasable DB-API connections."""

    def acquire(self):
        """Return a connection or raise ConnectionUnavailableError."""
        ...

    def release(self, conn) -> None:
        """Give a connection back. Must never raise."""
        ...


class PostgresConnectionPool:
    """
    ConnectionProvider backed by psycopg2's ThreadedConnectionPool.

    The threaded variant is required because the transport serves every
    client session on its own thread.
    """

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
    ) -> None:
        self._dsn = dsn
        self._min_conn = min_conn
        self._max_conn = max_conn
        self._pool: pool.ThreadedConnectionPool | None = None

    def open(self) -> None:
        """
        Initialize the database connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self._min_conn, self._max_conn, self._dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def acquire(self):
        """
        Get a connection from the pool.

        Raises:
            PoolExhaustedError: If all connections are checked out.
            ConnectionUnavailableError: If the pool is not open, the DSN is
                invalid or the database refused a new connection.
        """
        if self._pool is None:
            raise ConnectionUnavailableError("Database pool not initialized. Call open() first.")
        try:
            return self._pool.getconn()
        except pool.PoolError as e:
            if self._pool.closed:
                raise ConnectionUnavailableError(str(e)) from e
            raise PoolExhaustedError(str(e)) from e
        except psycopg2.Error as e:
            # With min_conn=0 the DSN is only parsed here
            raise ConnectionUnavailableError(str(e)) from e

    def release(self, conn) -> None:
        """Return a connection back to the pool."""
        if self._pool is None:
            return
        try:
            self._pool.putconn(conn)
        except Exception as e:
            logger.warning(f"Failed to release connection: {e}")

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")


@contextmanager
def scoped_connection(provider: ConnectionProvider) -> Iterator:
    """
    Borrow one connection for the duration of a ``with`` block.

    Acquisition errors propagate before the block runs, so nothing is
    released in that case. Whatever the provider raises comes out as a
    ConnectionUnavailableError.
    """
    try:
        conn = provider.acquire()
    except ConnectionUnavailableError:
        raise
    except Exception as e:
        logger.error(f"Connection provider failed: {e}")
        raise ConnectionUnavailableError(str(e)) from e
    try:
        yield conn
    finally:
        provider.release(conn)
