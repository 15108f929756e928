from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from ..errors import FormatError
from ..models.table_data import Row, TableData, cell_text

"""Tabular text reader (CSV / JSON) -> canonical TableData.

CSV: first non-empty line is the header, every following non-empty line a row.
     Plain comma split; one leading/trailing double quote per cell is stripped.
     Quoted commas and embedded newlines are not supported.
JSON: one of three shapes, resolved once here so nothing downstream branches on it
     1. [[header...], [row...], ...]
     2. {"rows": [[header...], [row...], ...]}
     3. [{...}, ...] or {"rows": [{...}, ...]}  (columns = first object's keys)

Duplicate header names are kept as-is; when indexing a row the last one wins.
"""

__all__ = [
    "FormatError",
    "parse",
    "parse_csv",
    "parse_json",
    "format_hint_for",
    "read_table_file",
]

FORMAT_HINTS = ("csv", "json")

_LINE_BREAK = re.compile(r"\r?\n")


def _split_csv_line(line: str) -> list[str]:
    cells = []
    for cell in line.split(","):
        cell = cell.strip()
        if cell.startswith('"'):
            cell = cell[1:]
        if cell.endswith('"'):
            cell = cell[:-1]
        cells.append(cell)
    return cells


def _records_from_positional(header: list[Any], data_rows: list[Any]) -> TableData:
    columns = [cell_text(h) for h in header]
    rows: list[Row] = []
    for raw in data_rows:
        cells = raw if isinstance(raw, list) else []
        record: Row = {}
        for index, name in enumerate(columns):
            value = cells[index] if index < len(cells) else None
            record[name] = "" if value is None else value
        rows.append(record)
    return TableData(columns=columns, rows=rows)


def parse_csv(text: str) -> TableData:
    """Parse comma-separated text. Requires a header and at least one data row."""
    lines = [line.strip() for line in _LINE_BREAK.split(text)]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        raise FormatError("CSV must include a header row and at least one data row.")

    header = _split_csv_line(lines[0])
    return _records_from_positional(header, [_split_csv_line(line) for line in lines[1:]])


def parse_json(text: str) -> TableData:
    """Parse JSON in any of the supported shapes."""
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(f"invalid JSON: {e}") from e

    # shape 1: top-level array of arrays
    if isinstance(parsed, list) and parsed and isinstance(parsed[0], list):
        return _records_from_positional(parsed[0], parsed[1:])

    if isinstance(parsed, list):
        source = parsed
    elif isinstance(parsed, dict):
        source = parsed.get("rows")
    else:
        source = None

    if not isinstance(source, list) or not source:
        raise FormatError("JSON must be an array of rows or include a non-empty rows array.")

    # shape 2: {"rows": [[...], ...]}
    if isinstance(source[0], list):
        return _records_from_positional(source[0], source[1:])

    # shape 3: array of objects
    if not all(isinstance(item, dict) for item in source):
        raise FormatError("JSON rows must all be objects or all be arrays.")
    columns = [str(key) for key in source[0].keys()]
    return TableData(columns=columns, rows=[dict(item) for item in source])


def parse(text: str, format_hint: str) -> TableData:
    """Parse ``text`` using the parser selected by ``format_hint`` ("csv" or "json")."""
    hint = (format_hint or "").strip().lower()
    if hint not in FORMAT_HINTS:
        raise FormatError(f"unsupported format: {format_hint!r}")
    if hint == "csv":
        return parse_csv(text)
    return parse_json(text)


def format_hint_for(file_name: str | Path) -> str:
    """Pick the parser from a file extension; anything but .csv is read as JSON."""
    return "csv" if Path(file_name).suffix.lower() == ".csv" else "json"


def read_table_file(path: Path) -> TableData:
    """Read a .csv/.json file (UTF-8, BOM tolerated) into a TableData."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FormatError(f"cannot read {path.name}: {e}") from e
    return parse(text, format_hint_for(path))
