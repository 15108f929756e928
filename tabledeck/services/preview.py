from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..models.column import ColumnDescriptor
from ..models.table_data import Row, cell_text

"""On-screen preview table.

Recomputed from the current rows + column model on every call (no incremental state),
so it is safe to call after each option or column edit.
"""

__all__ = [
    "PREVIEW_ROW_LIMIT",
    "build_preview_frame",
]

PREVIEW_ROW_LIMIT = 10


def build_preview_frame(
    rows: Sequence[Row], columns: Sequence[ColumnDescriptor], limit: int = PREVIEW_ROW_LIMIT
) -> pd.DataFrame:
    """First ``limit`` rows restricted to the active ``columns``, in column order.

    Returns an empty frame when there are no rows or no active columns.
    """
    active = [c for c in columns if c.included]
    if not active or not rows:
        return pd.DataFrame()
    names = [c.name for c in active]
    data = [[cell_text(row.get(name, "")) for name in names] for row in rows[: max(limit, 0)]]
    return pd.DataFrame(data, columns=names)
