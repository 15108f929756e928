from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import Any

from ..errors import ValidationError
from ..models.column import REFERENCE_SPAN_INCHES, Alignment, ColumnDescriptor
from ..models.export_options import to_number

"""Column model: ordered, editable list of column descriptors.

Edits replace the affected descriptor (descriptors are frozen), so the list returned by
active_columns() is a safe snapshot for an export even if the user keeps editing.
"""

__all__ = [
    "ColumnModel",
    "default_width",
]


def default_width(column_count: int) -> float:
    """Initial width so that all columns together fill the reference span."""
    return REFERENCE_SPAN_INCHES / max(column_count, 1)


class ColumnModel:
    """Ordered column descriptors supporting reorder/include/exclude/resize/align."""

    def __init__(self, columns: Iterable[ColumnDescriptor] = ()) -> None:
        self._columns: list[ColumnDescriptor] = list(columns)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> ColumnModel:
        names = list(names)
        width = default_width(len(names))
        return cls(ColumnDescriptor(name=name, width=width) for name in names)

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(list(self._columns))

    def names(self) -> list[str]:
        return [c.name for c in self._columns]

    def _index(self, name: str) -> int:
        # duplicate header names resolve to the first descriptor
        for index, column in enumerate(self._columns):
            if column.name == name:
                return index
        raise ValidationError(f"unknown column: {name}")

    def get(self, name: str) -> ColumnDescriptor:
        return self._columns[self._index(name)]

    def _update(self, name: str, **changes: Any) -> ColumnDescriptor:
        index = self._index(name)
        updated = replace(self._columns[index], **changes)
        self._columns[index] = updated
        return updated

    def reorder(self, name: str, target_name: str | None) -> None:
        """Drop ``name`` onto ``target_name``: it takes the target's current position.

        Moving up lands before the target, moving down lands after it, so dropping onto
        the last column moves to the end. ``target_name=None`` also moves to the end.
        A single-element splice: the relative order of every other column is unchanged.
        """
        if target_name == name:
            return
        to_index = len(self._columns) - 1 if target_name is None else self._index(target_name)
        moved = self._columns.pop(self._index(name))
        self._columns.insert(to_index, moved)

    def set_included(self, name: str, included: bool) -> None:
        self._update(name, included=bool(included))

    def set_all_included(self, included: bool) -> None:
        self._columns = [replace(c, included=bool(included)) for c in self._columns]

    def set_width(self, name: str, value: Any) -> float:
        """Set a width from raw input; invalid or non-positive input keeps the previous width."""
        current = self.get(name).width
        width = to_number(value, current)
        if width <= 0:
            width = current
        return self._update(name, width=width).width

    def set_align(self, name: str, value: Alignment | str) -> None:
        if isinstance(value, Alignment):
            align = value
        else:
            try:
                align = Alignment(str(value).strip().lower())
            except ValueError as e:
                raise ValidationError(f"invalid alignment for {name}: {value!r}") from e
        self._update(name, align=align)

    def active_columns(self) -> list[ColumnDescriptor]:
        """Included columns in current order."""
        return [c for c in self._columns if c.included]
