from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Export lifecycle state and the aggregated result of one export run."""

__all__ = [
    "ExportState",
    "ExportResult",
]


class ExportState(Enum):
    """States of a single export run.

    State transitions:
        idle -> validating -> applying_model -> paginating -> estimating
             -> partitioning -> rendering -> done
    Any state may move to failed.
    """
    IDLE = "idle"
    VALIDATING = "validating"
    APPLYING_MODEL = "applying_model"
    PAGINATING = "paginating"
    ESTIMATING = "estimating"
    PARTITIONING = "partitioning"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a completed export."""
    files: list[Path]  # Rendered files, in partition order
    page_count: int  # Pages rendered (after preview truncation)
    row_count: int  # Rows contained in those pages
    active_column_count: int
    estimated_mb: float
    preview: bool
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    partition_sizes: list[int] = field(default_factory=list)  # Pages per file

    @property
    def file_count(self) -> int:
        return len(self.files)
