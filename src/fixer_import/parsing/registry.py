from __future__ import annotations

from typing import Any

from .schema import RecordSchema


# names accepted by `get_record_schema`, and the CLI's `--profile` choices
PROFILE_NAMES: tuple[str, ...] = ("jobs",)


def get_record_schema(name: str) -> RecordSchema[Any]:
    """
    A registry that resolves an import profile name to its record schema.
    `FieldSpec` lists define the parsing rules inside the profile modules.
    """
    if name == "jobs":
        from .profiles.jobs import JOB_IMPORT_SCHEMA
        return JOB_IMPORT_SCHEMA

    raise ValueError(f"Unknown import profile: {name}")
