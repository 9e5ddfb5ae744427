from __future__ import annotations

import pytest

from fixer_import.parsing.primitives import (
    FieldError,
    leading_float,
    leading_int,
    parse_enum,
    parse_flag,
    parse_instant_iso,
    parse_int_in_range,
    parse_positive_float,
    parse_positive_int,
    parse_required_text,
    parse_split_list,
)
from fixer_import.parsing.types import RejectCode


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("25.00", 25.0), ("19.99", 19.99), ("-89.6501", -89.6501), ("25.00abc", 25.0), (".5", 0.5), ("1e3", 1000.0)],
)
def test_leading_float_reads_number_prefix(raw: str, expected: float) -> None:
    assert leading_float(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "nan", "$25", None, "1e999", "-1e999", "inf", "٣"])
def test_leading_float_without_number(raw: str | None) -> None:
    assert leading_float(raw) is None


def test_leading_int_truncates_at_first_non_digit() -> None:
    assert leading_int("2.9") == 2
    assert leading_int("12 hours") == 12
    assert leading_int("-3") == -3
    assert leading_int("abc") is None
    assert leading_int("٣") is None


def test_overflowing_number_is_not_a_number() -> None:
    with pytest.raises(FieldError) as e:
        parse_positive_float("1e999", field="payAmount")
    assert e.value.code == RejectCode.invalid_numeric


def test_required_text_rejects_empty_and_absent() -> None:
    assert parse_required_text(" Ada ", field="title") == "Ada"
    with pytest.raises(FieldError) as e:
        parse_required_text("", field="title", message="Title is required")
    assert e.value.code == RejectCode.missing_required
    assert e.value.field == "title"
    assert e.value.message == "Title is required"
    with pytest.raises(FieldError):
        parse_required_text(None, field="title")


def test_positive_float_bounds() -> None:
    assert parse_positive_float("19.99", field="payAmount") == 19.99
    for raw in ("0", "-5"):
        with pytest.raises(FieldError) as e:
            parse_positive_float(raw, field="payAmount")
        assert e.value.code == RejectCode.out_of_range
    with pytest.raises(FieldError) as e:
        parse_positive_float("free", field="payAmount")
    assert e.value.code == RejectCode.invalid_numeric


def test_positive_int() -> None:
    assert parse_positive_int("3", field="estimatedDuration") == 3
    with pytest.raises(FieldError) as e:
        parse_positive_int("0", field="estimatedDuration")
    assert e.value.code == RejectCode.out_of_range
    with pytest.raises(FieldError) as e:
        parse_positive_int("", field="estimatedDuration")
    assert e.value.code == RejectCode.invalid_int


def test_int_in_range_falls_back_to_default_only_when_unreadable() -> None:
    kw = dict(field="workerCount", default=1, minimum=1, maximum=50)
    assert parse_int_in_range("abc", **kw) == 1
    assert parse_int_in_range("", **kw) == 1
    assert parse_int_in_range("50", **kw) == 50
    for raw in ("0", "51", "-2"):
        with pytest.raises(FieldError) as e:
            parse_int_in_range(raw, **kw)
        assert e.value.code == RejectCode.out_of_range


def test_enum_is_exact_with_optional_default() -> None:
    assert parse_enum("hourly", field="payType", choices=("fixed", "hourly")) == "hourly"
    with pytest.raises(FieldError) as e:
        parse_enum("Hourly", field="payType", choices=("fixed", "hourly"))
    assert e.value.code == RejectCode.invalid_enum
    assert e.value.value == "Hourly"
    assert parse_enum("", field="urgency", choices=("low", "medium"), default="medium") == "medium"
    assert parse_enum(None, field="urgency", choices=("low", "medium"), default="medium") == "medium"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("TRUE", True), ("True", True), ("1", True), ("false", False), ("yes", False), ("0", False), ("", False), (None, False)],
)
def test_flag(raw: str | None, expected: bool) -> None:
    assert parse_flag(raw) is expected


def test_split_list() -> None:
    assert parse_split_list("mowing; edging ;leaf removal") == ("mowing", "edging", "leaf removal")
    assert parse_split_list("") == ()
    assert parse_split_list(None) == ()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-15T09:00:00Z", "2024-01-15T09:00:00.000Z"),
        ("2024-01-15T09:00:00.250Z", "2024-01-15T09:00:00.250Z"),
        ("2024-01-15 11:00:00+02:00", "2024-01-15T09:00:00.000Z"),
        ("2024-01-15T09:00:00", "2024-01-15T09:00:00.000Z"),
        ("2024-01-15", "2024-01-15T00:00:00.000Z"),
    ],
)
def test_instant_iso_normalizes_to_utc(raw: str, expected: str) -> None:
    assert parse_instant_iso(raw, field="scheduledStart") == expected


def test_instant_iso_rejects_unparseable_and_empty() -> None:
    with pytest.raises(FieldError) as e:
        parse_instant_iso("next tuesday", field="scheduledStart")
    assert e.value.code == RejectCode.invalid_timestamp
    for raw in ("Jan 15 2024 09:00", "01/15/2024"):
        with pytest.raises(FieldError) as e:
            parse_instant_iso(raw, field="scheduledStart")
        assert e.value.code == RejectCode.invalid_timestamp
        assert "ISO-8601" in e.value.message
    with pytest.raises(FieldError) as e:
        parse_instant_iso("", field="scheduledStart")
    assert e.value.code == RejectCode.missing_required
