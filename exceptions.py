"""
exceptions.py
-------------
Exception hierarchy for the account server.

Only infrastructure and protocol problems are exceptions. Expected
database outcomes (no row, nothing deleted) travel as values, see
models/result.py.
"""


class AccountServerError(Exception):
    """Base exception for all account server errors."""


class ConnectionUnavailableError(AccountServerError):
    """A database connection could not be obtained from the provider."""


class PoolExhaustedError(ConnectionUnavailableError):
    """Every connection in the pool is already checked out."""


class QueryDecodeError(AccountServerError):
    """A request payload does not match the expected query shape."""
