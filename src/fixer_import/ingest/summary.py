from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ImportSummary:
    """Outcome of one persisted import."""
    operation_id: UUID
    input_path: str
    total: int          # data rows considered
    loaded: int         # jobs inserted
    rejected: int       # distinct rows that failed parsing or insertion

    def render_one_line(self) -> str:
        """How the summary is formatted for the terminal."""
        return f"jobs: total={self.total} loaded={self.loaded} rejected={self.rejected} operation_id={self.operation_id}"
