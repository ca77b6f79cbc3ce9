"""
db/connection.py
----------------
Connection lifecycle for the data access layer.

Every statement runs on a connection that is acquired for that statement
only and released afterwards, on success and on failure alike. Two
strategies are available:

    - DirectConnector: opens a fresh psycopg2 connection per call and closes it.
    - PooledConnector: borrows from a psycopg2 ThreadedConnectionPool and
      returns the connection right after the statement.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool, extras

from config import DatabaseConfig
from db.errors import DatabaseConnectionError
from utils.logger import get_logger

logger = get_logger(__name__)

# Bind and read uuid columns as uuid.UUID
extras.register_uuid()


class DirectConnector:
    """Opens one connection per call. No state survives between calls."""

    def __init__(self, config: DatabaseConfig):
        self.config = config

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Open a connection and always close it on exit.

        Raises:
            DatabaseConnectionError: If the server is unreachable or refuses us.
        """
        try:
            conn = psycopg2.connect(**self.config.connect_kwargs())
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to {self.config.hostname}:{self.config.port}: {e}")
            raise DatabaseConnectionError(str(e)) from e
        try:
            yield conn
        finally:
            conn.close()

    def close(self) -> None:
        """Nothing is held between calls."""


class PooledConnector:
    """
    Borrows a pooled connection for exactly one statement.

    Args:
        config: Connection parameters; ``pool_max`` bounds the pool size.
        min_conn: Connections opened eagerly.
    """

    def __init__(self, config: DatabaseConfig, min_conn: int = 1):
        self.config = config
        try:
            self._pool = pool.ThreadedConnectionPool(
                min_conn, max(min_conn, config.pool_max), **config.connect_kwargs()
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise DatabaseConnectionError(str(e)) from e
        # One slot per pooled connection; callers past pool_max wait here.
        self._slots = threading.BoundedSemaphore(max(min_conn, config.pool_max))
        logger.info("Database connection pool initialized successfully.")

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Borrow a connection, waiting up to ``connect_timeout`` seconds for a
        free one (forever when the timeout is 0).

        Raises:
            DatabaseConnectionError: If no connection freed up in time.
        """
        timeout = self.config.connect_timeout or None
        if not self._slots.acquire(timeout=timeout):
            logger.error(f"No pooled connection became free within {timeout}s")
            raise DatabaseConnectionError(
                f"Timed out after {timeout}s waiting for a pooled connection"
            )
        try:
            try:
                conn = self._pool.getconn()
            except psycopg2.Error as e:
                raise DatabaseConnectionError(str(e)) from e
            try:
                yield conn
            finally:
                # Broken connections are discarded instead of being reused.
                self._pool.putconn(conn, close=bool(conn.closed))
        finally:
            self._slots.release()

    def close(self) -> None:
        """Close all connections in the pool."""
        self._pool.closeall()
        logger.info("Database connection pool closed.")


def make_connector(config: DatabaseConfig):
    """Pick the pooled strategy when ``pool_max`` is set, per-call otherwise."""
    if config.pool_max > 0:
        return PooledConnector(config)
    return DirectConnector(config)
