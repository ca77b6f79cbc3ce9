"""
db/errors.py
------------
Exceptions raised by the database layer.
Callers above this layer only ever need to catch `DatabaseError`.
"""

from typing import Optional


class DatabaseError(Exception):
    """Base class for all database layer failures."""


class DatabaseConnectionError(DatabaseError):
    """The connection could not be established or was lost mid-statement."""


class QueryError(DatabaseError):
    """
    A statement was rejected by the server.

    Attributes:
        pgcode: The PostgreSQL SQLSTATE code, when the driver reported one.
    """

    def __init__(self, message: str, pgcode: Optional[str] = None):
        super().__init__(message)
        self.pgcode = pgcode


class MappingError(DatabaseError):
    """A result row did not line up with the result's column descriptors."""
