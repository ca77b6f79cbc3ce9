"""
db/query_builder.py
-------------------
Turns a table name, an equality condition map and query options into a
parameterized SQL statement plus its positional argument list.

Placeholders are numbered `$1..$n` in the order they are generated, and
every placeholder has exactly one matching value in the returned params.
This module performs no I/O.

Table, column and field names are interpolated as-is. They must come from
trusted code, never from request input.
"""

import re
import uuid
from typing import Any, Mapping, Optional, Sequence, TypedDict, Union

Scalar = Union[str, int, bool, uuid.UUID]

_SCALAR_TYPES = (str, int, bool, uuid.UUID)
_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


class QueryOptions(TypedDict, total=False):
    fields: Sequence[str]
    limit: int


def is_scalar(value: Any, nullable: bool = False) -> bool:
    """True if ``value`` can be bound to a placeholder."""
    if value is None:
        return nullable
    return isinstance(value, _SCALAR_TYPES)


def _check_value(column: str, value: Any, nullable: bool) -> None:
    if not is_scalar(value, nullable):
        raise TypeError(
            f"Unsupported value for column '{column}': {type(value).__name__}"
        )


def _where(conditions: Optional[Mapping[str, Scalar]], start: int,
           params: list, sep: str = " = ") -> tuple[str, int]:
    """
    Render ``WHERE "a" = $i AND "b" = $j`` and push each value into params.

    Returns:
        The clause (empty when there are no conditions) and the next index.
    """
    parts = []
    i = start
    for key, value in (conditions or {}).items():
        _check_value(key, value, nullable=False)
        parts.append(f'{"AND" if parts else "WHERE"} "{key}"{sep}${i}')
        params.append(value)
        i += 1
    return " ".join(parts), i


def build_select(table: str, conditions: Optional[Mapping[str, Scalar]] = None,
                 options: Optional[QueryOptions] = None) -> tuple[str, list]:
    """
    Build a SELECT statement.

    Args:
        table: Table to read from.
        conditions: Column → value equality filters, ANDed together.
        options: ``fields`` to project (default ``*``) and ``limit``.

    Returns:
        ``(sql, params)``.

    Example:
        >>> build_select("recruiters", {"id": "abc"}, {"fields": ["name", "city"]})
        ('SELECT \\'name\\', \\'city\\' FROM recruiters WHERE "id" = $1;', ['abc'])
    """
    options = options or {}
    columns = "*"
    if options.get("fields"):
        columns = ", ".join(f"'{name}'" for name in options["fields"])

    params: list = []
    sql = f"SELECT {columns} FROM {table}"

    where, i = _where(conditions, 1, params)
    if where:
        sql = f"{sql} {where}"

    if options.get("limit"):
        sql = f"{sql} LIMIT ${i}"
        params.append(str(options["limit"]))

    return f"{sql};", params


def build_insert(table: str, data: Mapping[str, Optional[Scalar]]) -> tuple[str, list]:
    """Build an INSERT of one row, columns and values in key order."""
    if not data:
        raise ValueError(f"Nothing to insert into '{table}'")
    for key, value in data.items():
        _check_value(key, value, nullable=True)

    columns = ", ".join(data.keys())
    markers = ", ".join(f"${i}" for i in range(1, len(data) + 1))
    return f"INSERT INTO {table} ({columns}) VALUES ({markers});", list(data.values())


def build_update(table: str, conditions: Optional[Mapping[str, Scalar]],
                 data: Mapping[str, Optional[Scalar]]) -> tuple[str, list]:
    """
    Build an UPDATE setting every key of ``data`` on the matching rows.

    An empty condition map produces no WHERE clause, so every row is updated.
    """
    if not data:
        raise ValueError(f"Nothing to update in '{table}'")

    params: list = []
    assignments = []
    for i, (key, value) in enumerate(data.items(), start=1):
        _check_value(key, value, nullable=True)
        assignments.append(f"{key}=${i}")
        params.append(value)

    sql = f"UPDATE {table} SET {', '.join(assignments)}"
    where, _ = _where(conditions, len(params) + 1, params, sep="=")
    if where:
        sql = f"{sql} {where}"
    return f"{sql};", params


def build_delete(table: str, conditions: Optional[Mapping[str, Scalar]]) -> tuple[str, list]:
    """
    Build a DELETE over the matching rows.

    Condition values are bound exactly like SELECT. An empty condition map
    produces no WHERE clause, so every row is deleted.
    """
    params: list = []
    sql = f"DELETE FROM {table}"
    where, _ = _where(conditions, 1, params)
    if where:
        sql = f"{sql} {where}"
    return f"{sql};", params


def count_placeholders(sql: str) -> int:
    return len(_PLACEHOLDER_RE.findall(sql))


def to_pyformat(sql: str, params: Sequence[Any]) -> str:
    """
    Rewrite `$n` markers into the `%s` markers psycopg2 binds.

    Literal `%` characters are doubled so the driver does not treat them
    as markers.

    Raises:
        AssertionError: If the markers are not exactly `$1..$len(params)`
            in order. That is a builder bug, never a runtime condition.
    """
    indices = [int(n) for n in _PLACEHOLDER_RE.findall(sql)]
    if indices != list(range(1, len(params) + 1)):
        raise AssertionError(
            f"Placeholder mismatch: {indices} for {len(params)} params in {sql!r}"
        )
    return _PLACEHOLDER_RE.sub("%s", sql.replace("%", "%%"))
