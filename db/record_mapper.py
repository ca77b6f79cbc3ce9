"""
db/record_mapper.py
-------------------
Converts raw result rows into records keyed by column name.
"""

from typing import Any, Sequence

from db.errors import MappingError


def _column_name(descriptor: Any) -> str:
    """Accept plain names as well as DB-API column descriptors."""
    if isinstance(descriptor, str):
        return descriptor
    name = getattr(descriptor, "name", None)
    return name if name is not None else descriptor[0]


def map_records(rows: Sequence[Sequence[Any]], columns: Sequence[Any]) -> list[dict]:
    """
    Zip every row with the column descriptors.

    Args:
        rows: Row value sequences, as returned by ``cursor.fetchall()``.
        columns: Column names or descriptors (``cursor.description``),
            in the same order as the row values.

    Returns:
        One dict per row, keys in column order.

    Raises:
        MappingError: If any row's width differs from the number of columns.
            Nothing is returned in that case.
    """
    names = [_column_name(c) for c in columns]
    for index, row in enumerate(rows):
        if len(row) != len(names):
            raise MappingError(
                f"Row {index} has {len(row)} values but the result has {len(names)} columns"
            )
    return [dict(zip(names, row)) for row in rows]
