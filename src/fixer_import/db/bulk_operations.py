from __future__ import annotations

from pathlib import Path
from typing import Literal
from uuid import UUID

from psycopg import Connection


OperationStatus = Literal["processing", "completed", "partial", "failed"]


def operation_status(*, successful: int, failed: int) -> OperationStatus:
    """Final status of a finished import: nothing created (empty input included), no failures, or some."""
    if successful == 0:
        return "failed"
    if failed == 0:
        return "completed"
    return "partial"


def insert_bulk_operation(conn: Connection, *, input_path: Path, total_jobs: int) -> UUID:
    """
    Create a `bulk_job_operations` row in `processing` state, returns `operation_id`.

    The caller commits immediately so the ledger persists even if later steps error.
    """
    row = conn.execute(
        """
        INSERT INTO bulk_job_operations (operation_type, input_path, total_jobs, status)
        VALUES ('create', %s, %s, 'processing')
        RETURNING operation_id
        """,
        (str(input_path), total_jobs),
    ).fetchone()
    assert row is not None
    return row[0]


def finish_bulk_operation(conn: Connection, *, operation_id: UUID, successful: int, failed: int) -> OperationStatus:
    """Record final counts and status, stamping `completed_at`."""
    status = operation_status(successful=successful, failed=failed)
    conn.execute(
        """
        UPDATE bulk_job_operations
        SET successful_jobs = %s, failed_jobs = %s, status = %s, completed_at = now()
        WHERE operation_id = %s
        """,
        (successful, failed, status, operation_id),
    )
    return status


def mark_bulk_operation_failed(conn: Connection, *, operation_id: UUID) -> None:
    """The run hit an infra error; nothing it wrote survives."""
    conn.execute(
        "UPDATE bulk_job_operations SET status = 'failed', completed_at = now() WHERE operation_id = %s",
        (operation_id,),
    )
