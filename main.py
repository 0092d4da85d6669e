"""
main.py
-------
Entry point for the account server.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Serve the line protocol over TCP until interrupted.
    - Close the pool on shutdown.
"""

from config import LOG_LEVEL, SERVER_HOST, SERVER_PORT
from db.connection import PostgresConnectionPool
from db.init_db import create_tables
from handlers.message_handler import MessageHandler
from server.protocol_handler import AccountServer
from utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Initialize and run the server."""
    setup_logging(LOG_LEVEL)

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    db_pool = PostgresConnectionPool()
    db_pool.open()
    create_tables(db_pool)

    # ── 2. Serve ──────────────────────────────────────────
    message_handler = MessageHandler(db_pool)
    with AccountServer((SERVER_HOST, SERVER_PORT), message_handler) as server:
        logger.info(f"Account server listening on {SERVER_HOST}:{SERVER_PORT}")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutdown requested.")

    # ── 3. Cleanup on shutdown ────────────────────────────
    db_pool.close()
    logger.info("Account server stopped.")


if __name__ == "__main__":
    main()
