"""
db/executor.py
--------------
Runs a JoinQuery and streams its rows through a server-side cursor.

The rows are only valid inside the `with` block. Leaving it, normally or
through an exception, closes the cursor, ends the read-only transaction
and hands the connection back to the pool.
"""

import uuid
from contextlib import contextmanager
from typing import Iterator

import psycopg2

from config import DB_FETCH_SIZE
from db.connection import pooled_connection
from db.query import JoinQuery
from utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def stream_rows(query: JoinQuery, fetch_size: int = DB_FETCH_SIZE) -> Iterator[Iterator[tuple]]:
    """
    Execute `query` read-only and yield an iterator over its raw row tuples.

    Args:
        query: The join to run.
        fetch_size: Rows fetched from the server per round trip.

    Raises:
        psycopg2.Error: Propagated unchanged from execute or iteration, or
            from ending the transaction when nothing else failed first.

    Usage:
        with stream_rows(query) as rows:
            for row in rows:
                ...
    """
    with pooled_connection() as conn:
        try:
            conn.readonly = True
            # Named cursors live on the server and are fetched in batches
            with conn.cursor(name=f"stream_{uuid.uuid4().hex}") as cur:
                cur.itersize = fetch_size
                cur.execute(query.to_sql(), query.params())
                yield iter(cur)
        except BaseException:
            _end_read_only(conn, raise_errors=False)
            raise
        else:
            _end_read_only(conn, raise_errors=True)


def _end_read_only(conn, raise_errors: bool) -> None:
    """
    Roll back the read transaction and clear the read-only flag.

    A connection that cannot be reset is closed so the pool discards it.
    The reset error is only raised when no earlier error is propagating.
    """
    if conn.closed:
        return
    try:
        conn.rollback()
        conn.readonly = None
    except psycopg2.Error as e:
        logger.error(f"Cannot reset connection after streaming, discarding it: {e}")
        conn.close()
        if raise_errors:
            raise
