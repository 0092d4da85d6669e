"""Pytest configuration and fixtures."""

import sqlite3
from decimal import Decimal

import pytest

from db.init_db import create_tables
from exceptions import PoolExhaustedError
from handlers.message_handler import MessageHandler


class _SqliteCursor:
    """Cursor adapter: psycopg2 placeholders and context-manager support."""

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> bool:
        self._cursor.close()
        return False

    def execute(self, sql: str, params: tuple = ()) -> None:
        params = tuple(float(p) if isinstance(p, Decimal) else p for p in params)
        self._cursor.execute(sql.replace("%s", "?"), params)

    def fetchone(self):
        return self._cursor.fetchone()

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount


class _SqliteConnection:
    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def cursor(self) -> _SqliteCursor:
        return _SqliteCursor(self._db.cursor())

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()


class SqliteProvider:
    """In-memory connection provider that keeps acquire/release accounting."""

    def __init__(self) -> None:
        self.db = sqlite3.connect(":memory:", check_same_thread=False)
        self.acquired = 0
        self.released = 0
        self.fail_acquire = False

    def acquire(self):
        if self.fail_acquire:
            raise PoolExhaustedError("connection pool exhausted")
        self.acquired += 1
        return _SqliteConnection(self.db)

    def release(self, conn) -> None:
        self.released += 1

    @property
    def checked_out(self) -> int:
        return self.acquired - self.released

    def query_one(self, sql: str, params: tuple = ()):
        return self.db.execute(sql, params).fetchone()


@pytest.fixture
def provider() -> SqliteProvider:
    """Provider over a fresh schema holding two customers and three accounts."""
    p = SqliteProvider()
    create_tables(p)
    p.db.executemany(
        "INSERT INTO customers VALUES (?, ?, ?, ?, ?, ?, ?)",
        [
            (1, "Ada", "Lovelace", 36, "F", "Mathematician", "12 St James's Square"),
            (2, "Alan", "Turing", 41, "M", "Cryptanalyst", "Bletchley Park"),
        ],
    )
    p.db.executemany(
        "INSERT INTO accounts VALUES (?, ?, ?)",
        [(10, 1, 100), (11, 2, 250.5), (12, 2, 0)],
    )
    p.db.commit()
    p.acquired = p.released = 0
    yield p
    p.db.close()


@pytest.fixture
def handler(provider: SqliteProvider) -> MessageHandler:
    return MessageHandler(provider)
