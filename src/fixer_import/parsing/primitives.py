from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Sequence

from .types import RejectCode


class FieldError(Exception):
    """A single field failed to coerce or validate. Caught at the row boundary."""

    def __init__(self, code: RejectCode, field: str, message: str, value: Any = None) -> None:
        super().__init__(f"{field}: {message}")
        self.code = code            # classifies the rejection type encountered
        self.field = field
        self.message = message      # human readable, shown to the importing user
        self.value = value          # raw offending value


# leading-number prefixes: "25.00abc" reads as 25.0, "abc" reads as nothing. ASCII digits only.
_FLOAT_PREFIX = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_PREFIX = re.compile(r"[+-]?[0-9]+")


def normalize_cell(v: Any) -> Any:
    """Trim `str` cells. Everything else (including `None` for an absent cell) is returned unchanged."""
    if isinstance(v, str):
        return v.strip()
    return v


def leading_float(v: Any) -> float | None:
    """Read the leading decimal number of `v`, or `None` if there isn't a finite one."""
    if v is None:
        return None
    m = _FLOAT_PREFIX.match(str(v).lstrip())
    if m is None:
        return None
    f = float(m.group(0))
    return f if math.isfinite(f) else None


def leading_int(v: Any) -> int | None:
    """Read the leading base-10 integer of `v`, or `None` if there isn't one. `"2.9"` reads as 2."""
    if v is None:
        return None
    m = _INT_PREFIX.match(str(v).lstrip())
    if m is None:
        return None
    return int(m.group(0))


## -- text fields

def parse_required_text(v: Any, *, field: str, message: str | None = None) -> str:
    """Non-empty text. Raises on `None` and on empty strings."""
    v = normalize_cell(v)
    if v is None or str(v) == "":
        raise FieldError(RejectCode.missing_required, field, message or f"{field} is required", v)
    return str(v)


def parse_optional_text(v: Any) -> str | None:
    """Passed through as is: `None` stays `None`, `""` stays `""`."""
    return None if v is None else str(v)


def parse_split_list(v: Any, *, sep: str = ";") -> tuple[str, ...]:
    """Split on `sep` and trim each segment. Absent or empty gives `()`."""
    v = normalize_cell(v)
    if not v:
        return ()
    return tuple(part.strip() for part in str(v).split(sep))


## -- numeric fields

def parse_float(v: Any, *, field: str) -> float:
    """Leading-number float. Raises when no number can be read."""
    f = leading_float(normalize_cell(v))
    if f is None:
        raise FieldError(RejectCode.invalid_numeric, field, f"Expected number, received {v!r}", v)
    return f


def parse_positive_float(v: Any, *, field: str) -> float:
    f = parse_float(v, field=field)
    if f <= 0:
        raise FieldError(RejectCode.out_of_range, field, "Number must be greater than 0", v)
    return f


def parse_positive_int(v: Any, *, field: str) -> int:
    """Leading-number integer, must be > 0."""
    i = leading_int(normalize_cell(v))
    if i is None:
        raise FieldError(RejectCode.invalid_int, field, f"Expected integer, received {v!r}", v)
    if i <= 0:
        raise FieldError(RejectCode.out_of_range, field, "Number must be greater than 0", v)
    return i


def parse_int_in_range(v: Any, *, field: str, default: int, minimum: int, maximum: int) -> int:
    """
    Leading-number integer bounded to `[minimum, maximum]`.

    Unreadable input falls back to `default` (no error); a readable number
    outside the bounds is an error.
    """
    i = leading_int(normalize_cell(v))
    if i is None:
        i = default
    if i < minimum:
        raise FieldError(RejectCode.out_of_range, field, f"Number must be greater than or equal to {minimum}", v)
    if i > maximum:
        raise FieldError(RejectCode.out_of_range, field, f"Number must be less than or equal to {maximum}", v)
    return i


## -- choice fields

def parse_enum(v: Any, *, field: str, choices: Sequence[str], default: str | None = None) -> str:
    """
    Exact (case-sensitive) member of `choices`.
    Absent or empty input gives `default` when one is set, otherwise raises.
    """
    v = normalize_cell(v)
    if (v is None or v == "") and default is not None:
        return default
    if v not in choices:
        expected = " | ".join(f"'{c}'" for c in choices)
        raise FieldError(
            RejectCode.invalid_enum,
            field,
            f"Invalid enum value. Expected {expected}, received {v!r}",
            v,
        )
    return v


def parse_flag(v: Any) -> bool:
    """`"true"` (any case) or `"1"` is `True`; anything else, absence included, is `False`."""
    v = normalize_cell(v)
    if v is None:
        return False
    s = str(v)
    return s.lower() == "true" or s == "1"


## -- timestamps

def parse_instant_iso(v: Any, *, field: str, message: str | None = None) -> str:
    """
    Parse an ISO-8601 date or datetime and normalize it to a UTC instant
    string, `YYYY-MM-DDTHH:MM:SS.mmmZ`.

    Accepts:
    - `2024-01-15T09:00:00Z`, `2024-01-15T09:00:00.000Z`
    - `2024-01-15 09:00:00+02:00`
    - `2024-01-15T09:00:00` and `2024-01-15` (assumption: UTC if tz missing)
    """
    v = normalize_cell(v)
    if v is None or v == "":
        raise FieldError(RejectCode.missing_required, field, message or f"{field} is required", v)

    s = str(v).replace("Z", "+00:00").replace("z", "+00:00")
    s = s.replace(" ", "T", 1)
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        raise FieldError(
            RejectCode.invalid_timestamp,
            field,
            f"Invalid date: {v!r}. Expected ISO-8601 (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SSZ); "
            "forms like 'Jan 15 2024' or '01/15/2024' are not accepted",
            v,
        )

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
