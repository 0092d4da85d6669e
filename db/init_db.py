"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import ConnectionProvider, scoped_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = (
    # Customers: ids are assigned by the server as MAX(customer_id) + 1
    """
    CREATE TABLE IF NOT EXISTS customers (
        customer_id     INTEGER PRIMARY KEY,
        first_name      VARCHAR(100) NOT NULL,
        last_name       VARCHAR(100) NOT NULL,
        age             INTEGER,
        sex             VARCHAR(10),
        activity        VARCHAR(100),
        address         VARCHAR(255)
    )
    """,
    # Accounts: one balance per account, owned by a customer
    """
    CREATE TABLE IF NOT EXISTS accounts (
        account_id      INTEGER PRIMARY KEY,
        customer_id     INTEGER REFERENCES customers(customer_id),
        balance         NUMERIC(12,2) NOT NULL DEFAULT 0
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_accounts_customer ON accounts(customer_id)",
)


def create_tables(provider: ConnectionProvider) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with scoped_connection(provider) as conn:
        try:
            with conn.cursor() as cur:
                for statement in SCHEMA_STATEMENTS:
                    cur.execute(statement)
            conn.commit()
            logger.info("Database schema initialized successfully.")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise


if __name__ == "__main__":
    from db.connection import PostgresConnectionPool
    db_pool = PostgresConnectionPool()
    db_pool.open()
    try:
        create_tables(db_pool)
    finally:
        db_pool.close()
    print("Database schema created successfully.")
