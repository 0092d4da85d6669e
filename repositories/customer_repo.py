"""
repositories/customer_repo.py
------------------------------
Data access layer for customers.
"""

from db.connection import scoped_connection
from exceptions import ConnectionUnavailableError
from models.query import NewCustomerQuery
from models.result import RepositoryResult
from repositories.base import BaseRepository

# The id is computed inside the INSERT itself. Racy under concurrent
# inserts, and NULL (so rejected by the primary key) on an empty table.
INSERT_CUSTOMER_SQL = """
    INSERT INTO customers (customer_id, first_name, last_name, age, sex, activity, address)
    VALUES (((SELECT MAX(customer_id) FROM customers) + 1), %s, %s, %s, %s, %s, %s);
"""


class CustomerRepository(BaseRepository):
    """Repository for the customers table."""

    def add(self, customer: NewCustomerQuery) -> RepositoryResult:
        """
        Insert a new customer with id MAX(customer_id) + 1.

        Returns:
            SUCCESS if exactly one row was inserted, NO_MATCH for any other
            affected-count, FAILED if the statement raised, UNAVAILABLE if
            no connection could be acquired.
        """
        try:
            with scoped_connection(self._provider) as conn:
                try:
                    with conn.cursor() as cur:
                        cur.execute(INSERT_CUSTOMER_SQL, (
                            customer.first_name, customer.last_name, customer.age,
                            customer.sex, customer.activity, customer.address,
                        ))
                        inserted = cur.rowcount
                    conn.commit()
                except Exception as e:
                    self._rollback(conn)
                    self._logger.warning(f"Failed to insert customer {customer.last_name!r}: {e}")
                    return RepositoryResult.failed(e)
        except ConnectionUnavailableError as e:
            self._logger.warning(f"Can't acquire a connection from the pool: {e}")
            return RepositoryResult.unavailable(e)

        if inserted != 1:
            self._logger.warning(f"Customer insert affected {inserted} row(s)")
            return RepositoryResult.no_match()
        self._logger.info(f"Added customer {customer.first_name} {customer.last_name}")
        return RepositoryResult.success()
