"""
db/connection.py
----------------
Connection providers for the data access layer.

Repositories never open connections themselves: they receive a
ConnectionProvider and borrow one connection per call through `transaction()`.
The default provider wraps psycopg2's SimpleConnectionPool.
"""

from contextlib import contextmanager
from typing import Iterator, Protocol

import psycopg2
from psycopg2 import pool
from psycopg2.extensions import connection as PGConnection

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionProvider(Protocol):
    """Anything that can hand out and take back a live DB-API connection."""

    def acquire(self) -> PGConnection:
        ...

    def release(self, conn: PGConnection) -> None:
        ...


class PooledConnectionProvider:
    """ConnectionProvider backed by a psycopg2 SimpleConnectionPool."""

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
    ):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: pool.SimpleConnectionPool | None = None

    def open(self) -> None:
        """
        Initialize the connection pool. Calling it twice is a no-op.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.SimpleConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def acquire(self) -> PGConnection:
        """
        Get a connection from the pool, opening the pool on first use.

        Raises:
            psycopg2.OperationalError: If no connection can be established.
            psycopg2.pool.PoolError: If the pool is exhausted.
        """
        if self._pool is None:
            self.open()
        return self._pool.getconn()

    def release(self, conn: PGConnection) -> None:
        """Return a connection back to the pool."""
        if self._pool is not None:
            self._pool.putconn(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")


@contextmanager
def transaction(provider: ConnectionProvider) -> Iterator[PGConnection]:
    """
    Borrow a connection for the duration of a `with` block.

    Commits when the block exits normally, rolls back when it raises, and
    always hands the connection back to the provider.
    """
    conn = provider.acquire()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        provider.release(conn)
