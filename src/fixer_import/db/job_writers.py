from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from psycopg import Connection, sql

from fixer_import.parsing.profiles.jobs import JOB_CATEGORIES, JobImportRecord
from fixer_import.parsing.types import RejectCode


class JobInsertError(Exception):
    """A validated record that job creation still refuses."""

    def __init__(self, code: RejectCode, field: str | None, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.field = field
        self.message = message
        self.value = value


# fixed cols in `jobs`, excluding DB defaults (`job_id`, `status`, `created_at`)
JOB_COLUMNS: tuple[str, ...] = (
    "operation_id",
    "source_row",
    "title",
    "description",
    "category",
    "location_address",
    "location_lat",
    "location_lng",
    "location_city",
    "location_state",
    "location_zip",
    "price",
    "price_type",
    "currency",
    "required_skills",
    "urgency",
    "worker_count",
    "estimated_duration_hours",
    "scheduled_start",
    "recurring",
    "client_notes",
    "background_check_required",
    "equipment_provided",
    "parking_available",
)

_INSERT_JOB = sql.SQL("INSERT INTO {tbl} ({cols}) VALUES ({vals}) RETURNING job_id").format(
    tbl=sql.Identifier("jobs"),
    cols=sql.SQL(", ").join(sql.Identifier(c) for c in JOB_COLUMNS),
    vals=sql.SQL(", ").join(sql.Placeholder() for _ in JOB_COLUMNS),
)


def check_category(record: JobImportRecord) -> None:
    """Job creation only accepts the closed category set, which import itself does not enforce."""
    if record.category not in JOB_CATEGORIES:
        expected = " | ".join(f"'{c}'" for c in JOB_CATEGORIES)
        raise JobInsertError(
            RejectCode.invalid_category,
            "category",
            f"Invalid enum value. Expected {expected}, received {record.category!r}",
            record.category,
        )


def job_params(record: JobImportRecord, *, operation_id: UUID | None, source_row: int | None) -> tuple[Any, ...]:
    """Column values for one record, in `JOB_COLUMNS` order."""
    return (
        operation_id,
        source_row,
        record.title,
        record.description,
        record.category,
        record.location.address,
        record.location.latitude,
        record.location.longitude,
        record.location.city,
        record.location.state,
        record.location.zip_code,
        record.pay_rate.amount,
        record.pay_rate.type,
        record.pay_rate.currency,
        list(record.requirements),
        record.urgency,
        record.worker_count,
        record.estimated_duration,
        _as_datetime(record.schedule.start_date),
        record.schedule.recurring,
        record.client_notes,
        record.background_check_required,
        record.equipment_provided,
        record.parking_available,
    )


def insert_job(
    conn: Connection,
    record: JobImportRecord,
    *,
    operation_id: UUID | None = None,
    source_row: int | None = None,
) -> UUID:
    """
    Create one job from one record, returns `job_id`.

    Raises `JobInsertError` for out-of-set categories; DB constraint failures
    propagate as `psycopg` errors.
    """
    check_category(record)
    row = conn.execute(_INSERT_JOB, job_params(record, operation_id=operation_id, source_row=source_row)).fetchone()
    assert row is not None
    return row[0]


def _as_datetime(instant: str) -> datetime:
    """Normalized `...Z` instants back to aware datetimes for `timestamptz`."""
    return datetime.fromisoformat(instant.replace("Z", "+00:00"))
