from __future__ import annotations

from dataclasses import dataclass

from .table_data import Row

"""Derived pagination models: pages (one slide each) and partitions (one file each)."""

__all__ = [
    "Page",
    "Partition",
]


@dataclass(frozen=True)
class Page:
    """Contiguous slice of rows rendered on a single slide."""
    number: int  # 1-based position in the full page sequence
    rows: tuple[Row, ...]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class Partition:
    """Consecutive pages routed to one output file."""
    number: int  # 1-based file index
    pages: tuple[Page, ...]

    def __len__(self) -> int:
        return len(self.pages)

    @property
    def row_count(self) -> int:
        return sum(len(p) for p in self.pages)
