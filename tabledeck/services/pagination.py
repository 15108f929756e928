from __future__ import annotations

import math
from collections.abc import Sequence

from ..errors import ValidationError
from ..models.deck import Page
from ..models.table_data import Row

"""Paginator: split the row sequence into fixed-size pages, one per slide."""

__all__ = [
    "paginate",
    "normalize_rows_per_page",
]


def normalize_rows_per_page(rows_per_page: float) -> int:
    """Floor to an integer and clamp to >= 1."""
    return max(1, math.floor(rows_per_page))


def paginate(rows: Sequence[Row], rows_per_page: float) -> list[Page]:
    """Return ceil(len(rows) / rows_per_page) contiguous pages; only the last may be short.

    Raises:
        ValidationError: when there are no rows.
    """
    if not rows:
        raise ValidationError("no rows to export")
    size = normalize_rows_per_page(rows_per_page)
    return [
        Page(number=index // size + 1, rows=tuple(rows[index : index + size]))
        for index in range(0, len(rows), size)
    ]
