"""Tests for the psycopg2-backed connection provider."""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2 import pool

from db.connection import PostgresConnectionPool, scoped_connection
from exceptions import ConnectionUnavailableError, PoolExhaustedError


@pytest.fixture
def pg_pool():
    with patch("db.connection.pool.ThreadedConnectionPool") as pool_cls:
        inner = pool_cls.return_value
        inner.closed = False
        provider = PostgresConnectionPool("postgresql://test", 1, 2)
        provider.open()
        yield provider, inner, pool_cls


class TestPostgresConnectionPool:

    def test_open_is_idempotent(self, pg_pool) -> None:
        provider, inner, pool_cls = pg_pool
        provider.open()
        pool_cls.assert_called_once_with(1, 2, "postgresql://test")

    def test_open_propagates_operational_error(self) -> None:
        with patch("db.connection.pool.ThreadedConnectionPool", side_effect=psycopg2.OperationalError("refused")):
            with pytest.raises(psycopg2.OperationalError):
                PostgresConnectionPool("postgresql://test").open()

    def test_acquire_before_open(self) -> None:
        with pytest.raises(ConnectionUnavailableError):
            PostgresConnectionPool("postgresql://test").acquire()

    def test_acquire(self, pg_pool) -> None:
        provider, inner, _ = pg_pool
        assert provider.acquire() is inner.getconn.return_value

    def test_exhausted(self, pg_pool) -> None:
        provider, inner, _ = pg_pool
        inner.getconn.side_effect = pool.PoolError("connection pool exhausted")

        with pytest.raises(PoolExhaustedError):
            provider.acquire()

    def test_closed_pool_is_not_exhaustion(self, pg_pool) -> None:
        provider, inner, _ = pg_pool
        inner.closed = True
        inner.getconn.side_effect = pool.PoolError("connection pool is closed")

        with pytest.raises(ConnectionUnavailableError) as exc_info:
            provider.acquire()
        assert not isinstance(exc_info.value, PoolExhaustedError)

    def test_database_refusal(self, pg_pool) -> None:
        provider, inner, _ = pg_pool
        inner.getconn.side_effect = psycopg2.OperationalError("too many clients")

        with pytest.raises(ConnectionUnavailableError):
            provider.acquire()

    @pytest.mark.parametrize("error", [
        psycopg2.ProgrammingError('invalid dsn: invalid connection option "bogus_option"'),
        psycopg2.InterfaceError("connection already closed"),
    ])
    def test_other_driver_errors(self, pg_pool, error) -> None:
        provider, inner, _ = pg_pool
        inner.getconn.side_effect = error

        with pytest.raises(ConnectionUnavailableError) as exc_info:
            provider.acquire()
        assert not isinstance(exc_info.value, PoolExhaustedError)
        assert exc_info.value.__cause__ is error

    def test_release_never_raises(self, pg_pool) -> None:
        provider, inner, _ = pg_pool
        inner.putconn.side_effect = pool.PoolError("trying to put unkeyed connection")

        provider.release(MagicMock())

    def test_close(self, pg_pool) -> None:
        provider, inner, _ = pg_pool
        provider.close()

        inner.closeall.assert_called_once()
        with pytest.raises(ConnectionUnavailableError):
            provider.acquire()


class TestScopedConnection:

    def test_releases_on_exception(self) -> None:
        provider = MagicMock()

        with pytest.raises(ValueError):
            with scoped_connection(provider) as conn:
                raise ValueError("boom")

        provider.release.assert_called_once_with(conn)

    def test_no_release_when_acquire_fails(self) -> None:
        provider = MagicMock()
        provider.acquire.side_effect = PoolExhaustedError("exhausted")

        with pytest.raises(PoolExhaustedError):
            with scoped_connection(provider):
                pass

        provider.release.assert_not_called()

    def test_foreign_provider_errors_become_unavailable(self) -> None:
        provider = MagicMock()
        provider.acquire.side_effect = psycopg2.InterfaceError("connection already closed")

        with pytest.raises(ConnectionUnavailableError):
            with scoped_connection(provider):
                pass

        provider.release.assert_not_called()
