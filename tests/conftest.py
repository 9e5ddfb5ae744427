from __future__ import annotations

from pathlib import Path

import pytest

from fixer_import.parsing.profiles.jobs import JOB_IMPORT_COLUMNS, JOB_IMPORT_TEMPLATE


def _find_repo_root(start: Path) -> Path:
    marker = "pyproject.toml"
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / marker).exists():
            return p
    raise RuntimeError(f"Could not find repo root from: {start}")


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """The absolute path to the repo root (finds by walking up to `pyproject.toml`)."""
    return _find_repo_root(Path(__file__))


@pytest.fixture()
def job_row() -> dict[str, str]:
    """One valid, header-keyed import row (the first template row)."""
    return {
        "title": "Office Cleaning",
        "description": "Daily office cleaning and maintenance",
        "category": "cleaning",
        "address": "123 Main St, Suite 100",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
        "latitude": "39.7817",
        "longitude": "-89.6501",
        "payAmount": "25.00",
        "payType": "hourly",
        "estimatedDuration": "2",
        "requirements": "vacuuming;dusting;trash removal",
        "urgency": "medium",
        "workerCount": "1",
        "backgroundCheckRequired": "false",
        "equipmentProvided": "true",
        "scheduledStart": "2024-01-15T09:00:00Z",
        "clientNotes": "Please use eco-friendly products",
    }


@pytest.fixture()
def header_line() -> str:
    return ",".join(JOB_IMPORT_COLUMNS)


@pytest.fixture()
def template_text() -> str:
    return JOB_IMPORT_TEMPLATE


@pytest.fixture()
def template_lines() -> list[str]:
    """Header, then the two sample rows."""
    return JOB_IMPORT_TEMPLATE.split("\n")
