"""
Helpers for statements whose column list is only known at request time.

Values are always passed as positional arguments; only column and table
names end up in the SQL text, and those are checked against a strict
identifier pattern first.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name or ""):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def build_update(
    table: str,
    values: Mapping[str, Any],
    *,
    key: Any,
    key_column: str = "id",
) -> tuple[str, list[Any]]:
    """
    Build `UPDATE <table> SET a = $1, b = $2 WHERE <key_column> = $3`.

    Every entry in `values` is included, whatever its value (None, "" and 0
    are real updates). Column order follows the mapping's iteration order.
    """
    if not values:
        raise ValueError("build_update needs at least one column.")

    _check_identifier(table)
    _check_identifier(key_column)

    assignments = []
    args: list[Any] = []
    for position, (column, value) in enumerate(values.items(), start=1):
        assignments.append(f"{_check_identifier(column)} = ${position}")
        args.append(value)

    args.append(key)
    sql = f"UPDATE {table} SET {', '.join(assignments)} WHERE {key_column} = ${len(args)}"
    return sql, args
