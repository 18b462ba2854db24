"""
db/connection.py
----------------
Owns the process-wide psycopg2 connection pool.

Callers never touch the pool directly: they borrow a connection with
`pooled_connection()`, which always hands it back when the block ends.
Connections that were closed while borrowed are discarded, not reused.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool
from psycopg2.extensions import connection as Connection

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Open the pool against DATABASE_URL. Calling it twice keeps the first pool.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
    except psycopg2.OperationalError as e:
        logger.error(f"Cannot open connection pool to {DATABASE_URL.rsplit('@', 1)[-1]}: {e}")
        raise
    logger.info(f"Connection pool ready ({min_conn}-{max_conn} connections).")


@contextmanager
def pooled_connection() -> Iterator[Connection]:
    """
    Borrow a connection for the duration of a `with` block.

    Raises:
        RuntimeError: If init_pool() has not been called.
        psycopg2.pool.PoolError: If every connection is already borrowed.
    """
    borrowed_from = _pool
    if borrowed_from is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    conn = borrowed_from.getconn()
    try:
        yield conn
    finally:
        borrowed_from.putconn(conn, close=bool(conn.closed))


def close_pool() -> None:
    """Close every pooled connection. Safe to call when no pool is open."""
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("Connection pool closed.")
