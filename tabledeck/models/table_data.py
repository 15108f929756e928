from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Canonical row/column model produced by every parser.

A Row maps column name -> cell value. Rows keep the source order and are never
mutated after parsing; column edits only change which keys are read.
"""

__all__ = [
    "Row",
    "TableData",
    "cell_text",
]

Row = dict[str, Any]


def cell_text(value: Any) -> str:
    """Convert a raw cell value to the text shown in a table cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        # JSON 1.0 and 1 display the same
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class TableData:
    """Parsed table: header names in source order plus the records."""
    columns: list[str]
    rows: list[Row] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)
