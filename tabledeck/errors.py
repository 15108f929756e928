from __future__ import annotations

from pathlib import Path

"""Exception taxonomy shared by the parser, the column model and the export pipeline.

- FormatError: input structure could not be turned into rows/columns
- ValidationError: user-controllable state is empty or invalid (no rows, no columns, ...)
- RenderError: the deck renderer failed; files written before the failure are listed
"""

__all__ = [
    "TableDeckError",
    "FormatError",
    "ValidationError",
    "RenderError",
]


class TableDeckError(Exception):
    """Base exception for tabledeck errors."""


class FormatError(TableDeckError):
    """Raised when uploaded text is malformed or has an unsupported shape."""


class ValidationError(TableDeckError):
    """Raised when rows/columns/options cannot be exported as they are."""


class RenderError(TableDeckError):
    """Raised when the deck renderer fails.

    Files rendered before the failure are not rolled back; they are exposed
    through ``rendered_files`` so callers can report partial output.
    """

    def __init__(self, message: str, rendered_files: list[Path] | None = None) -> None:
        super().__init__(message)
        self.rendered_files: list[Path] = list(rendered_files or [])
