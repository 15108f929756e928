from __future__ import annotations

import logging
from pathlib import Path

from ..models.table_data import Row, TableData
from ..parsing.reader import format_hint_for, parse, read_table_file
from .columns import ColumnModel

"""Session state: the currently loaded rows and their column model.

Lifecycle: created empty, replaced wholesale on every load, cleared when a load fails.
The export orchestrator only reads it (through snapshots) while an export runs.
"""

__all__ = [
    "TableSession",
]

logger = logging.getLogger(__name__)


class TableSession:
    """Rows + column model of the most recently loaded file."""

    def __init__(self) -> None:
        self.rows: list[Row] = []
        self.columns: ColumnModel = ColumnModel()
        self.source_name: str | None = None

    @property
    def is_loaded(self) -> bool:
        return bool(self.rows) and len(self.columns) > 0

    def clear(self) -> None:
        self.rows = []
        self.columns = ColumnModel()
        self.source_name = None

    def _apply(self, data: TableData, source_name: str) -> None:
        self.rows = list(data.rows)
        self.columns = ColumnModel.from_names(data.columns)
        self.source_name = source_name
        logger.info(
            "Loaded %d rows and %d columns from %s.", len(self.rows), len(self.columns), source_name
        )

    def load_text(self, text: str, format_hint: str, source_name: str = "<upload>") -> TableData:
        """Parse ``text`` and replace the session contents.

        On any parse failure the previous rows/columns are cleared (never partially
        applied) and the error is re-raised.
        """
        try:
            data = parse(text, format_hint)
        except Exception:
            self.clear()
            raise
        self._apply(data, source_name)
        return data

    def load_path(self, path: Path) -> TableData:
        """Load a .csv/.json file; the extension decides the parser."""
        logger.debug("reading %s as %s", path, format_hint_for(path))
        try:
            data = read_table_file(path)
        except Exception:
            self.clear()
            raise
        self._apply(data, path.name)
        return data
