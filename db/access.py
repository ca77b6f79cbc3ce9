"""
db/access.py
------------
Generic data access over any table: find_all, find_one, create, update,
destroy, plus the one-time schema init.

Each call runs exactly one statement on its own connection:
open → execute → map (reads only) → close. The connection is released on
every exit path. Failures are logged and re-raised as `DatabaseError`
subclasses; nothing is retried.

Concurrent calls never share a connection, but there is no ordering between
them either: two updates, or an update and a delete, on the same rows may
interleave arbitrarily.
"""

from typing import Mapping, Optional

import psycopg2
from psycopg2 import extensions

from config import DatabaseConfig
from db.connection import make_connector
from db.errors import DatabaseConnectionError, QueryError
from db.init_db import SCHEMA_SQL
from db.query_builder import (
    QueryOptions,
    Scalar,
    build_delete,
    build_insert,
    build_select,
    build_update,
    to_pyformat,
)
from db.record_mapper import map_records
from utils.logger import get_logger

logger = get_logger(__name__)


class DataAccess:
    """
    Runs built statements against PostgreSQL.

    Args:
        config: Connection parameters, built once at startup.
        connector: Optional connection strategy; defaults to the one
            selected by ``config.pool_max``.
    """

    def __init__(self, config: DatabaseConfig, connector=None):
        self.config = config
        self.connector = connector or make_connector(config)

    # ── SCHEMA ────────────────────────────────────────────

    def init(self) -> None:
        """
        Create the recruiters table if it is missing.
        Safe to call multiple times (uses IF NOT EXISTS).
        """
        self._execute(SCHEMA_SQL, [])
        logger.info("Database schema initialized successfully.")

    # ── READ ──────────────────────────────────────────────

    def find_all(self, table: str, conditions: Optional[Mapping[str, Scalar]] = None,
                 options: Optional[QueryOptions] = None) -> list[dict]:
        """
        Fetch every matching record.

        Returns:
            A list of dicts keyed by column name; empty when nothing matches.
        """
        sql, params = build_select(table, conditions, options)
        return self._execute(sql, params, fetch=True)

    def find_one(self, table: str, conditions: Optional[Mapping[str, Scalar]] = None,
                 options: Optional[QueryOptions] = None) -> Optional[dict]:
        """
        Fetch the first matching record.

        Returns:
            A dict, or None if nothing matches.
        """
        sql, params = build_select(table, conditions, {**(options or {}), "limit": 1})
        records = self._execute(sql, params, fetch=True)
        return records[0] if records else None

    # ── WRITE ─────────────────────────────────────────────

    def create(self, table: str, data: Mapping[str, Optional[Scalar]]) -> None:
        """Insert one row built from ``data``."""
        sql, params = build_insert(table, data)
        self._execute(sql, params)

    def update(self, table: str, conditions: Optional[Mapping[str, Scalar]],
               data: Mapping[str, Optional[Scalar]]) -> None:
        """Set ``data`` on every matching row. An empty condition map matches all rows."""
        sql, params = build_update(table, conditions, data)
        self._execute(sql, params)

    def destroy(self, table: str, conditions: Optional[Mapping[str, Scalar]]) -> None:
        """Delete every matching row. An empty condition map matches all rows."""
        sql, params = build_delete(table, conditions)
        self._execute(sql, params)

    def close(self) -> None:
        self.connector.close()

    # ── INTERNAL ──────────────────────────────────────────

    def _execute(self, sql: str, params: list, fetch: bool = False) -> Optional[list[dict]]:
        query = to_pyformat(sql, params)
        records = None
        with self.connector.connection() as conn:
            try:
                with conn.cursor() as cur:
                    logger.debug(f"Executing: {sql}")
                    cur.execute(query, params)
                    if fetch:
                        rows = cur.fetchall()
                        columns = cur.description
                conn.commit()
            except extensions.QueryCanceledError as e:
                self._rollback(conn)
                logger.error(f"Statement timed out: {sql}")
                raise QueryError(str(e), e.pgcode) from e
            except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
                self._rollback(conn)
                logger.error(f"Lost database connection: {e}")
                raise DatabaseConnectionError(str(e)) from e
            except psycopg2.Error as e:
                self._rollback(conn)
                logger.error(f"Query failed: {e}")
                raise QueryError(str(e), e.pgcode) from e

            if fetch:
                records = map_records(rows, columns)
        return records

    @staticmethod
    def _rollback(conn) -> None:
        if conn.closed:
            return
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"Rollback failed: {e}")
