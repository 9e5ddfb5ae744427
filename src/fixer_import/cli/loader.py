from __future__ import annotations

import logging
from pathlib import Path
from uuid import UUID

import psycopg
from psycopg import Connection

from fixer_import.db.bulk_operations import finish_bulk_operation, insert_bulk_operation, mark_bulk_operation_failed
from fixer_import.db.job_writers import JobInsertError, insert_job
from fixer_import.db.reject_writers import insert_import_errors
from fixer_import.ingest.summary import ImportSummary
from fixer_import.parsing.pipeline import ParseOptions, parse_file
from fixer_import.parsing.registry import get_record_schema
from fixer_import.parsing.types import ParseError, RejectCode

logger = logging.getLogger(__name__)


def import_file(
    conn: Connection,
    *,
    input_path: Path,
    options: ParseOptions | None = None,
    profile: str = "jobs",
) -> ImportSummary:
    """
    End-to-end bulk job import:
      - Parse the whole file (invalid rows collected, never raised),
      - Create a `bulk_job_operations` row (committed immediately),
      - Insert each parsed record as its own job, inside its own savepoint,
            - a record job creation refuses -> its error is recorded, the others carry on,
      - Store every parse/insert error in `import_errors`,
      - And finish the operation as `completed`, `partial` or `failed`.

    Raises only on infra related exceptions (bad connection, IO errors, etc.).
    Partial success is the norm, not an exception.
    """
    schema = get_record_schema(profile)
    result = parse_file(input_path, schema, options)

    ## -- create operation ledger, committed immediately
    operation_id: UUID = insert_bulk_operation(conn, input_path=input_path, total_jobs=result.total_rows)
    conn.commit()

    errors: list[ParseError] = list(result.errors)
    loaded = 0

    try:
        # one transaction for the jobs, errors and final status; per-row blocks below are savepoints in it.
        with conn.transaction():
            for source_row, record in zip(result.record_rows, result.data):
                try:
                    # savepoint: a refused insert must not poison the outer transaction.
                    with conn.transaction():
                        insert_job(conn, record, operation_id=operation_id, source_row=source_row)
                    loaded += 1
                except JobInsertError as e:
                    errors.append(ParseError(row=source_row, field=e.field, message=e.message, value=e.value, code=e.code))
                except (psycopg.DataError, psycopg.IntegrityError) as e:
                    logger.warning("row %d: job insert refused: %s", source_row, e)
                    errors.append(ParseError(row=source_row, message=str(e), code=RejectCode.row_error))

            insert_import_errors(conn, operation_id=operation_id, errors=errors)

            rejected = len({e.row for e in errors if e.row > 0})
            status = finish_bulk_operation(conn, operation_id=operation_id, successful=loaded, failed=rejected)

        logger.info("operation %s %s: %d loaded, %d rejected", operation_id, status, loaded, rejected)

        return ImportSummary(
            operation_id=operation_id,
            input_path=str(input_path),
            total=result.total_rows,
            loaded=loaded,
            rejected=rejected,
        )

    except Exception:
        # the transaction block already rolled back every job and error row (the ledger row is committed)
        conn.rollback()
        ## -- record that the run failed (separate txn)
        mark_bulk_operation_failed(conn, operation_id=operation_id)
        conn.commit()
        raise
