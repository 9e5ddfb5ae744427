from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from .primitives import FieldError
from .types import ParsedRecord, ParseError, RejectCode, RejectedRow

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Parser turns one raw cell (or `None` when absent) into a typed value, raising `FieldError`.
Parser = Callable[[Any], Any]
# Builder assembles the validated flat values into the output record.
Builder = Callable[[Mapping[str, Any]], T]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Any given column's configurable expectations."""
    name: str           # input column name, also the error field path.
    parser: Parser      # how to coerce/validate this column's value.


@dataclass(frozen=True, slots=True)
class RecordSchema(Generic[T]):
    """
    Validate and transform a single mapped row.

    Either:
    - return the record as a `ParsedRecord`,
    - or every field failure as a `RejectedRow` (field-granular, in `fields` order).

    Rows keyed by header are read by column name. Headerless rows are read by
    position, in `fields` order.
    """
    name: str
    fields: Sequence[FieldSpec]
    build: Builder[T]

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def validate(self, row: Mapping[str, Any] | Sequence[Any], *, source_row: int) -> ParsedRecord[T] | RejectedRow:
        """Never raises: an unexpected failure becomes one row-level error without a field path."""
        try:
            values: dict[str, Any] = {}
            errors: list[ParseError] = []

            ## -- Parsing loop, keep going past failing fields
            for index, f in enumerate(self.fields):
                raw_v = _cell(row, f.name, index)
                try:
                    values[f.name] = f.parser(raw_v)
                except FieldError as e:
                    errors.append(
                        ParseError(
                            row=source_row,
                            field=e.field,
                            message=e.message,
                            value=e.value,
                            code=e.code,
                        )
                    )

            if errors:
                return RejectedRow(errors=tuple(errors), source_row=source_row)

            return ParsedRecord(record=self.build(values), source_row=source_row)

        except Exception as e:
            logger.debug("row %d: unexpected %s while validating", source_row, type(e).__name__, exc_info=True)
            return RejectedRow(
                errors=(ParseError(row=source_row, message=str(e) or "Unknown parsing error", code=RejectCode.row_error),),
                source_row=source_row,
            )


def _cell(row: Mapping[str, Any] | Sequence[Any], name: str, index: int) -> Any:
    """Fetch a raw cell by column name, or by position for headerless rows. Absent gives `None`."""
    if isinstance(row, Mapping):
        return row.get(name)
    return row[index] if index < len(row) else None
