from __future__ import annotations

from typing import Sequence


def map_row(values: Sequence[str], headers: Sequence[str] | None) -> dict[str, str] | list[str]:
    """
    Key a tokenized row by its header names.

    - keys are the trimmed header names,
    - values are trimmed, and a row shorter than the header gets `""` for the missing cells,
    - extra cells beyond the header are dropped.

    Without `headers` the row passes through unchanged, as a plain ordered list.
    """
    if headers is None:
        return list(values)

    out: dict[str, str] = {}
    for i, header in enumerate(headers):
        v = values[i] if i < len(values) else ""
        out[header.strip()] = v.strip()
    return out
