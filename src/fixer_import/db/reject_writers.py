from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from psycopg import Connection, sql
from psycopg.types.json import Jsonb

from fixer_import.parsing.types import ParseError


# cols that should expect jsonb conversion
_JSONB_COLS = {"raw_value"}


def _adapt(col: str, value: Any) -> Any:
    """Adapt python values to DB types (e.g., `jsonb`)."""
    if col in _JSONB_COLS and value is not None:
        return Jsonb(value)
    return value


def insert_import_errors(conn: Connection, *, operation_id: UUID, errors: Sequence[ParseError]) -> None:
    """
    Insert `errors` into `import_errors`.

    Table/column identifiers are fixed constants. Values are parameterized.
    The empty-input error (`row=0`) is stored like any other.
    """
    cols = ("operation_id", "source_row", "field", "reason_code", "message", "raw_value")

    query = sql.SQL("INSERT INTO {tbl} ({cols}) VALUES ({vals})").format(
        tbl=sql.Identifier("import_errors"),
        cols=sql.SQL(", ").join(sql.Identifier(c) for c in cols),
        vals=sql.SQL(", ").join(sql.Placeholder() for _ in cols),
    )

    params: list[tuple[Any, ...]] = []
    for e in errors:
        params.append(
            (
                operation_id,
                e.row,
                e.field,
                e.code.value,
                e.message,
                _adapt("raw_value", e.value),
            )
        )

    if params:
        with conn.cursor() as cur:
            cur.executemany(query, params)
