from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Inches, Pt

from ..errors import RenderError
from ..models.column import Alignment
from .slides import CellSpec, DeckRenderer, RenderJob, SlideSpec

"""Deck Renderer backed by python-pptx.

One RenderJob -> one .pptx file on the wide (13.333 x 7.5 in) layout. Each slide gets a
bold title, a right-aligned "Slide k of M" counter and the styled table; speaker notes
are attached when the job carries them.
"""

__all__ = [
    "DeckRenderer",
    "PptxDeckRenderer",
]

logger = logging.getLogger(__name__)

SLIDE_WIDTH_IN = 13.333
SLIDE_HEIGHT_IN = 7.5
BLANK_LAYOUT_INDEX = 6

TITLE_COLOR = "0F172A"
COUNTER_COLOR = "64748B"
BORDER_WIDTH_EMU = 12700  # 1pt

_ALIGN = {
    Alignment.LEFT: PP_ALIGN.LEFT,
    Alignment.CENTER: PP_ALIGN.CENTER,
    Alignment.RIGHT: PP_ALIGN.RIGHT,
}

_ANCHOR = {
    "top": MSO_ANCHOR.TOP,
    "middle": MSO_ANCHOR.MIDDLE,
    "bottom": MSO_ANCHOR.BOTTOM,
}


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color)


def _border(border_name: str, color: str, width: int = BORDER_WIDTH_EMU) -> Any:
    ln = OxmlElement(f"a:{border_name}")
    ln.set("w", str(width))
    solid_fill = OxmlElement("a:solidFill")
    srgb = OxmlElement("a:srgbClr")
    srgb.set("val", color)
    solid_fill.append(srgb)
    ln.append(solid_fill)
    return ln


class PptxDeckRenderer:
    """Writes RenderJobs as .pptx files."""

    author = "tabledeck"
    subject = "Uploaded data to PowerPoint table"

    def render(self, job: RenderJob, output_dir: Path) -> Path:
        output_dir = Path(output_dir)
        target = output_dir / job.file_name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            prs = Presentation()
            prs.slide_width = Inches(SLIDE_WIDTH_IN)
            prs.slide_height = Inches(SLIDE_HEIGHT_IN)
            prs.core_properties.author = self.author
            prs.core_properties.subject = self.subject

            for spec in job.slides:
                self._add_slide(prs, spec, job)
            prs.save(str(target))
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"failed to render {job.file_name}: {e}") from e

        logger.debug("rendered %s slides=%d", target, len(job.slides))
        return target

    def _add_slide(self, prs: Any, spec: SlideSpec, job: RenderJob) -> None:
        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT_INDEX])

        self._add_text(
            slide, spec.title, left=0.5, top=0.2, width=12.2, height=0.45,
            size=20, bold=True, color=TITLE_COLOR, align=PP_ALIGN.LEFT,
        )
        self._add_text(
            slide, spec.counter, left=10.4, top=0.22, width=2.0, height=0.3,
            size=10, bold=False, color=COUNTER_COLOR, align=PP_ALIGN.RIGHT,
        )
        self._add_table(slide, spec, job)

        if spec.notes:
            slide.notes_slide.notes_text_frame.text = spec.notes

    def _add_text(
        self,
        slide: Any,
        text: str,
        *,
        left: float,
        top: float,
        width: float,
        height: float,
        size: float,
        bold: bool,
        color: str,
        align: Any,
    ) -> None:
        box = slide.shapes.add_textbox(Inches(left), Inches(top), Inches(width), Inches(height))
        paragraph = box.text_frame.paragraphs[0]
        paragraph.alignment = align
        run = paragraph.add_run()
        run.text = text
        run.font.size = Pt(size)
        run.font.bold = bold
        run.font.color.rgb = _rgb(color)

    def _add_table(self, slide: Any, spec: SlideSpec, job: RenderJob) -> None:
        options = job.options
        rows = [spec.header, *spec.body]
        n_rows, n_cols = len(rows), len(spec.header)
        shape = slide.shapes.add_table(
            n_rows,
            n_cols,
            Inches(0.5),
            Inches(0.85),
            Inches(12.3),
            Inches(options.row_height * n_rows),
        )
        table = shape.table
        for col_idx, width in enumerate(spec.column_widths):
            table.columns[col_idx].width = Inches(width)
        for row in table.rows:
            row.height = Inches(options.row_height)

        anchor = _ANCHOR.get(options.valign, MSO_ANCHOR.MIDDLE)
        for row_idx, cells in enumerate(rows):
            for col_idx, cell_spec in enumerate(cells):
                self._style_cell(table.cell(row_idx, col_idx), cell_spec, anchor, job)

    def _style_cell(self, cell: Any, spec: CellSpec, anchor: Any, job: RenderJob) -> None:
        options = job.options
        margin = Inches(options.cell_margin)
        cell.margin_left = margin
        cell.margin_right = margin
        cell.margin_top = margin
        cell.margin_bottom = margin
        cell.vertical_anchor = anchor
        cell.fill.solid()
        cell.fill.fore_color.rgb = _rgb(spec.fill)

        text_frame = cell.text_frame
        text_frame.word_wrap = True
        if options.autofit:
            text_frame.auto_size = MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE

        paragraph = text_frame.paragraphs[0]
        paragraph.alignment = _ALIGN[spec.align]
        run = paragraph.add_run()
        run.text = spec.text
        run.font.size = Pt(spec.font_size)
        run.font.bold = spec.bold
        run.font.italic = spec.italic
        run.font.color.rgb = _rgb(spec.color)

        # edge lines must precede the cell fill inside tcPr
        tcPr = cell._tc.get_or_add_tcPr()
        for index, border_name in enumerate(("lnL", "lnR", "lnT", "lnB")):
            tcPr.insert(index, _border(border_name, options.border_color))
