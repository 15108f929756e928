from __future__ import annotations

"""Deck size estimator.

Coarse linear model, not format-exact. It only decides whether a split is warranted,
so it must stay monotonic in all three inputs for the split decision to be stable.
"""

__all__ = [
    "estimate_deck_size_mb",
    "BYTES_PER_CELL",
    "BYTES_PER_PAGE",
    "BASE_BYTES",
]

BYTES_PER_CELL = 35
BYTES_PER_PAGE = 18_000
BASE_BYTES = 75_000
BYTES_PER_MB = 1024 * 1024


def estimate_deck_size_mb(total_rows: int, active_column_count: int, page_count: int) -> float:
    """Estimated output size in MB for the given table dimensions.

    >>> round(estimate_deck_size_mb(0, 0, 0), 4)
    0.0715
    """
    rough_bytes = (
        total_rows * active_column_count * BYTES_PER_CELL
        + page_count * BYTES_PER_PAGE
        + BASE_BYTES
    )
    return rough_bytes / BYTES_PER_MB
