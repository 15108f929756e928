"""Domain models for the tabular data -> slide-deck exporter.

Parsed data (TableData, Row), column configuration (ColumnDescriptor, Alignment),
pagination artifacts (Page, Partition), the per-export options snapshot and the
export outcome all live here.
"""

from .column import Alignment, ColumnDescriptor
from .deck import Page, Partition
from .export_options import ExportOptions
from .export_result import ExportResult, ExportState
from .table_data import Row, TableData, cell_text

__all__ = [
    # Parsed data
    "Row",
    "TableData",
    "cell_text",
    # Column configuration
    "Alignment",
    "ColumnDescriptor",
    # Pagination
    "Page",
    "Partition",
    # Export
    "ExportOptions",
    "ExportResult",
    "ExportState",
]
