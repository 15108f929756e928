from __future__ import annotations

from pathlib import Path

import pytest
from pptx import Presentation
from pptx.util import Inches

from conftest import make_rows
from tabledeck.errors import RenderError
from tabledeck.models.column import ColumnDescriptor
from tabledeck.models.deck import Partition
from tabledeck.models.export_options import ExportOptions
from tabledeck.render.pptx_renderer import PptxDeckRenderer
from tabledeck.render.slides import NOTES_TEXT, RenderJob, build_slide_specs
from tabledeck.services.pagination import paginate


def _job(options: ExportOptions, row_count: int = 5, part: int = 1, part_count: int = 1) -> RenderJob:
    columns = [ColumnDescriptor(name="id", width=3.0), ColumnDescriptor(name="value", width=5.0)]
    pages = paginate(make_rows(row_count), options.rows_per_page)
    partition = Partition(number=part, pages=tuple(pages))
    return RenderJob(
        file_name="deck.pptx",
        part_number=part,
        part_count=part_count,
        slides=build_slide_specs(partition, part_count, columns, options),
        options=options,
    )


def _texts(slide) -> list[str]:
    return [shape.text_frame.text for shape in slide.shapes if shape.has_text_frame]


def test_render_writes_one_slide_per_page(tmp_path: Path):
    options = ExportOptions(title="Inventory", rows_per_page=2, header_fill="112233")
    path = PptxDeckRenderer().render(_job(options), tmp_path / "out")

    assert path == tmp_path / "out" / "deck.pptx"
    prs = Presentation(str(path))
    assert len(prs.slides) == 3
    assert prs.slide_width == Inches(13.333)

    first = prs.slides[0]
    assert "Inventory" in _texts(first)
    assert "Slide 1 of 3" in _texts(first)

    table = next(shape for shape in first.shapes if shape.has_table).table
    assert len(table.rows) == 3  # header + 2 rows
    assert len(table.columns) == 2
    assert table.cell(0, 0).text == "id"
    assert table.cell(1, 1).text == "value0"
    assert str(table.cell(0, 0).fill.fore_color.rgb) == "112233"
    assert table.columns[1].width == Inches(5.0)


def test_render_adds_notes_and_part_title(tmp_path: Path):
    options = ExportOptions(title="Inventory", rows_per_page=10, include_notes=True)
    path = PptxDeckRenderer().render(_job(options, part=2, part_count=3), tmp_path)

    slide = Presentation(str(path)).slides[0]
    assert "Inventory (Part 2 of 3)" in _texts(slide)
    assert slide.notes_slide.notes_text_frame.text == NOTES_TEXT


def test_render_cell_borders_precede_fill(tmp_path: Path):
    path = PptxDeckRenderer().render(_job(ExportOptions(border_color="CBD5E1")), tmp_path)
    table = next(s for s in Presentation(str(path)).slides[0].shapes if s.has_table).table
    tcPr = table.cell(0, 0)._tc.tcPr
    tags = [child.tag.split("}")[1] for child in tcPr]
    assert tags[:4] == ["lnL", "lnR", "lnT", "lnB"]
    assert "solidFill" in tags[4:]


def test_render_failure_raises_render_error(tmp_path: Path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(RenderError, match="failed to render deck.pptx"):
        PptxDeckRenderer().render(_job(ExportOptions()), blocker)
