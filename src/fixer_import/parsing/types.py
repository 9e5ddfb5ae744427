from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")


class RejectCode(str, Enum):
    """Typed error classifications."""
    empty_input = "empty_input"
    missing_required = "missing_required"
    invalid_numeric = "invalid_numeric"
    invalid_int = "invalid_int"
    invalid_enum = "invalid_enum"
    out_of_range = "out_of_range"
    invalid_timestamp = "invalid_timestamp"
    row_error = "row_error"                 # not attributable to one field
    invalid_category = "invalid_category"   # only raised at persistence time


@dataclass(frozen=True, slots=True)
class ParseError:
    """One validation or parsing failure."""
    row: int                        # 1-based over non-blank lines, header included. 0 for empty input.
    message: str
    field: str | None = None        # dotted field path
    value: Any = None               # raw offending value, when known
    code: RejectCode = RejectCode.row_error

    def to_mapping(self) -> dict[str, Any]:
        out: dict[str, Any] = {"row": self.row, "message": self.message, "code": self.code.value}
        if self.field is not None:
            out["field"] = self.field
        if self.value is not None:
            out["value"] = self.value
        return out


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """
    Aggregate outcome of parsing a whole input.

    `successful_rows == len(data)` always holds, and the distinct rows in
    `errors` plus `successful_rows` add up to `total_rows`.
    """
    data: list[T]
    errors: list[ParseError]
    total_rows: int
    successful_rows: int
    record_rows: list[int] = field(default_factory=list)    # source row of each entry in `data`

    @property
    def failed_rows(self) -> int:
        """Number of distinct data rows with at least one error."""
        return len({e.row for e in self.errors if e.row > 0})

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_mapping(self) -> dict[str, Any]:
        """JSON-ready shape, records rendered through their own `to_mapping` when they have one."""
        return {
            "data": [_as_mapping(r) for r in self.data],
            "errors": [e.to_mapping() for e in self.errors],
            "totalRows": self.total_rows,
            "successfulRows": self.successful_rows,
        }


@dataclass(frozen=True, slots=True)
class ParsedRecord(Generic[T]):
    """A row that validated into a typed record."""
    record: T
    source_row: int


@dataclass(frozen=True, slots=True)
class RejectedRow:
    """A row that failed: one error per failing field, or a single row-level error."""
    errors: tuple[ParseError, ...]
    source_row: int


def _as_mapping(record: Any) -> Any:
    if hasattr(record, "to_mapping"):
        return record.to_mapping()
    if isinstance(record, Mapping):
        return dict(record)
    return record
