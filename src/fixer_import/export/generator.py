from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

from fixer_import.parsing.profiles.jobs import JOB_IMPORT_TEMPLATE


def stringify_cell(value: Any) -> str:
    """
    Render one cell as text.
    `None` -> `""`, bools -> `true`/`false`, integral floats drop `.0`, sequences are comma-joined.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify_cell(v) for v in value)
    return str(value)


def escape_field(value: str, delimiter: str = ",") -> str:
    """Quote a cell containing the delimiter, a `"`, or a line break, doubling inner quotes."""
    if delimiter in value or '"' in value or "\n" in value or "\r" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def generate_csv(
    records: Sequence[Mapping[str, Any]],
    *,
    headers: Sequence[str] | None = None,
    delimiter: str = ",",
    include_headers: bool = True,
) -> str:
    """
    Serialize flat records to delimited text, rows joined by `\\n`.

    Columns are `headers` when given, otherwise the key order of the first record.
    No records gives `""`, even when a header row is requested.
    """
    if not records:
        return ""

    cols = list(headers) if headers is not None else list(records[0].keys())
    lines: list[str] = []

    if include_headers:
        lines.append(delimiter.join(escape_field(h, delimiter) for h in cols))

    for record in records:
        lines.append(delimiter.join(escape_field(stringify_cell(record.get(c)), delimiter) for c in cols))

    return "\n".join(lines)


def write_template(path: Path) -> None:
    """Write the two-row job import sample to `path`."""
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(JOB_IMPORT_TEMPLATE + "\n")
