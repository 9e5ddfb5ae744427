from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str:
    """
    Read a whole import file into memory.

    `utf-8-sig` drops the BOM spreadsheet exports often start with, so the first
    header name is not polluted. `newline=""` keeps `\\r\\n` intact for the tokenizer.
    """
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        return f.read()
