from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..models.column import Alignment, ColumnDescriptor
from ..models.deck import Page, Partition
from ..models.export_options import ExportOptions
from ..models.table_data import Row, cell_text

"""Slide specs: the renderer-independent description of each slide in a file.

Everything the Deck Renderer needs (texts, per-cell styling, column widths, notes) is
resolved here, so renderers only translate specs into their output format.
"""

__all__ = [
    "CellSpec",
    "SlideSpec",
    "RenderJob",
    "DeckRenderer",
    "NOTES_TEXT",
    "build_table_rows",
    "build_slide_specs",
    "output_file_name",
    "page_rows",
]

NOTES_TEXT = (
    "[Notes]\n"
    "- Generated from uploaded data.\n"
    "- Column order, inclusion, widths, and styles were customized in the table builder.\n"
    "[/Notes]"
)


@dataclass(frozen=True)
class CellSpec:
    text: str
    bold: bool
    italic: bool
    color: str  # 6 hex digits
    fill: str  # 6 hex digits
    align: Alignment
    font_size: float


@dataclass(frozen=True)
class SlideSpec:
    """One slide: title, counter label and a header + body table."""
    title: str
    counter: str  # "Slide k of M" within the output file
    header: list[CellSpec]
    body: list[list[CellSpec]]
    column_widths: list[float]
    notes: str | None = None


@dataclass(frozen=True)
class RenderJob:
    """Everything the renderer needs for one output file (one partition)."""
    file_name: str
    part_number: int
    part_count: int
    slides: list[SlideSpec]
    options: ExportOptions


class DeckRenderer(Protocol):
    """Renders one output file per call and returns its path.

    Calls are made strictly one at a time; an implementation need not be reentrant.
    """

    def render(self, job: RenderJob, output_dir: Path) -> Path: ...


def output_file_name(prefix: str, part_number: int, part_count: int) -> str:
    """``<prefix>.pptx`` for a single file, ``<prefix>-part-<i>.pptx`` otherwise."""
    if part_count > 1:
        return f"{prefix}-part-{part_number}.pptx"
    return f"{prefix}.pptx"


def build_table_rows(
    rows: Sequence[Row], columns: Sequence[ColumnDescriptor], options: ExportOptions
) -> tuple[list[CellSpec], list[list[CellSpec]]]:
    """Styled header cells and body cells for the given rows and active columns."""
    header = [
        CellSpec(
            text=column.name,
            bold=options.header_bold,
            italic=False,
            color=options.header_text,
            fill=options.header_fill,
            align=column.align,
            font_size=options.header_font_size,
        )
        for column in columns
    ]
    body = [
        [
            CellSpec(
                text=cell_text(row.get(column.name, "")),
                bold=options.body_bold,
                italic=options.body_italic,
                color=options.body_text,
                fill=options.body_fill,
                align=column.align,
                font_size=options.body_font_size,
            )
            for column in columns
        ]
        for row in rows
    ]
    return header, body


def build_slide_specs(
    partition: Partition,
    part_count: int,
    columns: Sequence[ColumnDescriptor],
    options: ExportOptions,
) -> list[SlideSpec]:
    title = options.title
    if part_count > 1:
        title = f"{title} (Part {partition.number} of {part_count})"
    widths = [column.width for column in columns]
    notes = NOTES_TEXT if options.include_notes else None

    slides = []
    for index, page in enumerate(partition.pages, start=1):
        header, body = build_table_rows(page.rows, columns, options)
        slides.append(
            SlideSpec(
                title=title,
                counter=f"Slide {index} of {len(partition.pages)}",
                header=header,
                body=body,
                column_widths=list(widths),
                notes=notes,
            )
        )
    return slides


def page_rows(pages: Sequence[Page]) -> list[Row]:
    """Concatenate the rows of ``pages`` in order."""
    return [row for page in pages for row in page.rows]
