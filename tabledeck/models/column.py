from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Column descriptor model.

Descriptors are frozen; the ColumnModel swaps in a new descriptor on every edit so
an export can hold a snapshot without copying.
"""

__all__ = [
    "Alignment",
    "ColumnDescriptor",
    "REFERENCE_SPAN_INCHES",
]

# Total width the default column widths add up to.
REFERENCE_SPAN_INCHES = 13.0


class Alignment(Enum):
    """Horizontal text alignment of a column (header and body cells)."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class ColumnDescriptor:
    """One column of the table as configured by the user."""
    name: str  # Header name, key into every Row
    included: bool = True
    width: float = 1.5  # Relative width hint (inches on the wide slide layout)
    align: Alignment = Alignment.LEFT
