from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from fixer_import.ingest.readers import read_text

from .adapter import map_row
from .schema import RecordSchema
from .tokenizer import split_line, split_lines
from .types import ParsedRecord, ParseError, ParseResult, RejectCode

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_INPUT_MESSAGE = "CSV file is empty"


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Recognized parse options."""
    skip_header: bool = True    # treat the first non-blank line as column names
    delimiter: str = ","        # single-character field separator

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")


def parse_text(text: str, schema: RecordSchema[T], options: ParseOptions | None = None) -> ParseResult[T]:
    """
    Tokenize, map and validate every row of `text`, in input order.

    - blank lines are discarded before anything else is counted,
    - no lines at all -> a single empty-input error with `row=0`,
    - error rows are 1-based over the remaining lines, so the header (when present) is row 1.

    Never raises for per-row problems: a failing row contributes errors and no record,
    and processing carries on with the next row.
    """
    opts = options or ParseOptions()
    lines = split_lines(text)

    if not lines:
        return ParseResult(
            data=[],
            errors=[ParseError(row=0, message=EMPTY_INPUT_MESSAGE, code=RejectCode.empty_input)],
            total_rows=0,
            successful_rows=0,
        )

    start = 1 if opts.skip_header else 0
    headers = split_line(lines[0], opts.delimiter) if opts.skip_header else None
    data_lines = lines[start:]

    data: list[T] = []
    record_rows: list[int] = []
    errors: list[ParseError] = []

    for i, line in enumerate(data_lines):
        source_row = i + start + 1
        row = map_row(split_line(line, opts.delimiter), headers)

        res = schema.validate(row, source_row=source_row)
        if isinstance(res, ParsedRecord):
            data.append(res.record)
            record_rows.append(source_row)
        else:
            errors.extend(res.errors)

    logger.info(
        "parsed %d rows with schema %r: %d ok, %d errors",
        len(data_lines), schema.name, len(data), len(errors),
    )

    return ParseResult(
        data=data,
        errors=errors,
        total_rows=len(data_lines),
        successful_rows=len(data),
        record_rows=record_rows,
    )


def parse_file(path: Path, schema: RecordSchema[T], options: ParseOptions | None = None) -> ParseResult[T]:
    """Read the whole file up front (the only blocking step), then `parse_text` it."""
    return parse_text(read_text(path), schema, options)
