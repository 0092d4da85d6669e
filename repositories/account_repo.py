"""
repositories/account_repo.py
-----------------------------
Data access layer for accounts.
All SQL queries related to the `accounts` table live here.
"""

from decimal import Decimal, InvalidOperation

from db.connection import scoped_connection
from exceptions import ConnectionUnavailableError
from models.result import RepositoryResult
from repositories.base import BaseRepository

SELECT_BALANCE_SQL = "SELECT balance FROM accounts WHERE account_id = %s;"
ADD_TO_BALANCE_SQL = "UPDATE accounts SET balance = balance + %s WHERE account_id = %s;"
DELETE_ACCOUNT_SQL = "DELETE FROM accounts WHERE account_id = %s;"


def _to_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class AccountRepository(BaseRepository):
    """Repository for reads and updates on the accounts table."""

    # ── READ ──────────────────────────────────────────────

    def get_balance(self, account_id: int) -> RepositoryResult:
        """
        Read the balance of an account.

        Returns:
            SUCCESS with the balance, NO_MATCH if the account does not exist,
            FAILED if the query raised, UNAVAILABLE if no connection could
            be acquired.
        """
        try:
            with scoped_connection(self._provider) as conn:
                return self._read_balance(conn, account_id)
        except ConnectionUnavailableError as e:
            self._logger.error(f"Can't acquire a connection from the pool: {e}")
            return RepositoryResult.unavailable(e)

    def _read_balance(self, conn, account_id: int) -> RepositoryResult:
        try:
            with conn.cursor() as cur:
                cur.execute(SELECT_BALANCE_SQL, (account_id,))
                row = cur.fetchone()
        except Exception as e:
            self._rollback(conn)
            self._logger.error(f"Failed to read balance of account {account_id}: {e}")
            return RepositoryResult.failed(e)
        if row is None:
            return RepositoryResult.no_match()
        try:
            return RepositoryResult.success(_to_decimal(row[0]))
        except (InvalidOperation, TypeError) as e:
            self._logger.error(f"Unreadable balance {row[0]!r} for account {account_id}")
            return RepositoryResult.failed(e)

    # ── UPDATE ────────────────────────────────────────────

    def add_to_balance(self, account_id: int, delta: Decimal) -> RepositoryResult:
        """
        Add a signed delta to an account balance, then read it back.

        The update and the read are two statements on the same connection,
        not one transaction: a concurrent writer can land in between.
        A failed update is logged and ignored, the read decides the result.

        Returns:
            The result of the read-back, see `get_balance`.
        """
        try:
            with scoped_connection(self._provider) as conn:
                try:
                    with conn.cursor() as cur:
                        cur.execute(ADD_TO_BALANCE_SQL, (delta, account_id))
                        updated = cur.rowcount
                    conn.commit()
                    self._logger.info(f"Applied {delta:+} to account {account_id} ({updated} row(s))")
                except Exception as e:
                    self._rollback(conn)
                    self._logger.warning(f"Non-problematic exception on balance update for {account_id}: {e}")
                return self._read_balance(conn, account_id)
        except ConnectionUnavailableError as e:
            self._logger.warning(f"Can't acquire a connection from the pool: {e}")
            return RepositoryResult.unavailable(e)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, account_id: int) -> RepositoryResult:
        """
        Delete an account.

        Returns:
            SUCCESS if exactly one row was deleted, NO_MATCH for any other
            affected-count, FAILED if the statement raised.
        """
        try:
            with scoped_connection(self._provider) as conn:
                try:
                    with conn.cursor() as cur:
                        cur.execute(DELETE_ACCOUNT_SQL, (account_id,))
                        deleted = cur.rowcount
                    conn.commit()
                except Exception as e:
                    self._rollback(conn)
                    self._logger.error(f"Failed to delete account {account_id}: {e}")
                    return RepositoryResult.failed(e)
        except ConnectionUnavailableError as e:
            self._logger.warning(f"Can't acquire a connection from the pool: {e}")
            return RepositoryResult.unavailable(e)

        if deleted != 1:
            return RepositoryResult.no_match()
        self._logger.info(f"Deleted account {account_id}")
        return RepositoryResult.success()
