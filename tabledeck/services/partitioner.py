from __future__ import annotations

import math
from collections.abc import Sequence

from ..errors import ValidationError
from ..models.deck import Page, Partition

"""Partitioner: group pages into output files so each stays under a size budget.

The split is by page count (per-page byte size is not known independently), giving
an even-as-possible distribution rather than a size-exact one.
"""

__all__ = [
    "partition_pages",
    "should_split",
]


def should_split(
    estimated_mb: float, *, split_enabled: bool, max_mb_per_file: float, preview: bool = False
) -> bool:
    return split_enabled and not preview and estimated_mb > max_mb_per_file


def partition_pages(
    pages: Sequence[Page],
    *,
    estimated_mb: float,
    split_enabled: bool,
    max_mb_per_file: float,
    preview: bool = False,
) -> list[Partition]:
    """Split ``pages`` into consecutive partitions.

    Concatenating the returned partitions' pages reproduces ``pages`` exactly once,
    in order; no partition is empty.

    Raises:
        ValidationError: when ``pages`` is empty or ``max_mb_per_file`` < 1.
    """
    if not pages:
        raise ValidationError("no rows to export")
    if max_mb_per_file < 1:
        raise ValidationError(f"max file size must be at least 1 MB (got {max_mb_per_file})")

    if not should_split(
        estimated_mb, split_enabled=split_enabled, max_mb_per_file=max_mb_per_file, preview=preview
    ):
        return [Partition(number=1, pages=tuple(pages))]

    target_file_count = math.ceil(estimated_mb / max_mb_per_file)
    pages_per_file = max(1, math.ceil(len(pages) / target_file_count))
    return [
        Partition(number=index // pages_per_file + 1, pages=tuple(pages[index : index + pages_per_file]))
        for index in range(0, len(pages), pages_per_file)
    ]
