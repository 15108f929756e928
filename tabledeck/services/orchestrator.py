from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import pandas as pd

from ..errors import FormatError, RenderError, ValidationError
from ..logging.error_log import NO_PARTITION, ErrorLogBuffer, ErrorRecord
from ..models.column import ColumnDescriptor
from ..models.deck import Page, Partition
from ..models.export_options import ExportOptions
from ..models.export_result import ExportResult, ExportState
from ..models.table_data import Row, TableData
from ..render.slides import DeckRenderer, RenderJob, build_slide_specs, output_file_name, page_rows
from .columns import ColumnModel
from .pagination import paginate
from .partitioner import partition_pages
from .preview import PREVIEW_ROW_LIMIT, build_preview_frame
from .progress import ExportProgress
from .session import TableSession
from .sizing import estimate_deck_size_mb

"""Export orchestration: rows + column model + options -> one or more deck files.

Single path, no retries:
    validate -> apply column model -> paginate -> estimate -> partition -> render (1..N)
Partitions are rendered strictly one after another. A render failure stops the run;
files written before it stay on disk and are reported on the raised RenderError.
"""

__all__ = [
    "ExportOrchestrator",
]

logger = logging.getLogger(__name__)

_ERROR_TYPES = {
    FormatError: "FORMAT_ERROR",
    ValidationError: "VALIDATION_ERROR",
    RenderError: "RENDER_ERROR",
}


def _error_type(exc: BaseException) -> str:
    for cls, name in _ERROR_TYPES.items():
        if isinstance(exc, cls):
            return name
    return "UNEXPECTED_ERROR"


class ExportOrchestrator:
    """Owns the loaded session and runs exports against a Deck Renderer.

    The caller must not start a second export while one is running; there is no
    guard here and no cancellation.
    """

    def __init__(
        self,
        renderer: DeckRenderer,
        *,
        progress: ExportProgress | None = None,
        error_log: ErrorLogBuffer | None = None,
        session: TableSession | None = None,
    ) -> None:
        self.renderer = renderer
        self.progress = progress
        self.error_log = error_log
        self.session = session if session is not None else TableSession()
        self.state = ExportState.IDLE
        self.history: list[ExportState] = [ExportState.IDLE]

    # -- session ---------------------------------------------------------------------

    @property
    def columns(self) -> ColumnModel:
        return self.session.columns

    @property
    def rows(self) -> list[Row]:
        return self.session.rows

    def load_file(self, text: str, format_hint: str, source_name: str = "<upload>") -> TableData:
        """Replace the session with freshly parsed ``text``."""
        try:
            return self.session.load_text(text, format_hint, source_name=source_name)
        except FormatError as e:
            self._record(e, ExportState.IDLE, NO_PARTITION, source_name)
            raise

    def load_path(self, path: Path) -> TableData:
        try:
            return self.session.load_path(path)
        except FormatError as e:
            self._record(e, ExportState.IDLE, NO_PARTITION, path.name)
            raise

    def preview_frame(self, limit: int = PREVIEW_ROW_LIMIT) -> pd.DataFrame:
        """Preview table for the current model (see build_preview_frame)."""
        return build_preview_frame(self.session.rows, list(self.session.columns), limit=limit)

    # -- export ----------------------------------------------------------------------

    def _transition(self, state: ExportState) -> None:
        logger.debug("export state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _report(self, percent: float, label: str) -> None:
        if self.progress is not None:
            self.progress.update(percent, label)

    def _record(self, exc: BaseException, stage: ExportState, partition: int, source: str | None) -> None:
        if self.error_log is None:
            return
        self.error_log.append(
            ErrorRecord.create(
                source=source or "<upload>",
                stage=stage.value,
                partition=partition,
                error_type=_error_type(exc),
                message=str(exc),
            )
        )

    def _fail(self, exc: BaseException, partition: int = NO_PARTITION) -> None:
        stage = self.state
        self._transition(ExportState.FAILED)
        self._record(exc, stage, partition, self.session.source_name)
        if self.progress is not None:
            self.progress.fail(str(exc))
        logger.error("export failed during %s: %s", stage.value, exc)

    def _validate(self, options: ExportOptions, preview_only: bool) -> list[ColumnDescriptor]:
        if not self.session.rows:
            raise ValidationError("no rows to export")
        active = self.session.columns.active_columns()
        if not active:
            raise ValidationError("no columns selected")
        if preview_only:
            count = options.preview_page_count
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise ValidationError("preview page count must be a whole positive number")
        return active

    def export_deck(
        self,
        options: ExportOptions,
        preview_only: bool = False,
        output_dir: Path = Path("."),
    ) -> ExportResult:
        """Run one export.

        Args:
            options: Snapshot of the export options (not re-read during the run)
            preview_only: Truncate to ``options.preview_page_count`` pages, never split
            output_dir: Directory the renderer writes into

        Returns:
            ExportResult describing the written files

        Raises:
            ValidationError: No rows, no included columns, or bad preview count
            RenderError: The renderer failed; ``rendered_files`` lists earlier output
        """
        start_time = datetime.now(UTC)
        self.history = []
        self._transition(ExportState.IDLE)
        rendered: list[Path] = []
        partition_number = NO_PARTITION

        try:
            self._transition(ExportState.VALIDATING)
            active = self._validate(options, preview_only)

            # snapshot: later column edits must not reach this run
            self._transition(ExportState.APPLYING_MODEL)
            columns = list(active)
            rows = list(self.session.rows)

            self._transition(ExportState.PAGINATING)
            pages: list[Page] = paginate(rows, options.rows_per_page)
            if preview_only:
                pages = pages[: options.preview_page_count]

            self._transition(ExportState.ESTIMATING)
            row_count = len(page_rows(pages))
            estimated_mb = estimate_deck_size_mb(row_count, len(columns), len(pages))
            logger.debug(
                "pages=%d rows=%d columns=%d estimated_mb=%.3f",
                len(pages), row_count, len(columns), estimated_mb,
            )

            self._transition(ExportState.PARTITIONING)
            partitions: list[Partition] = partition_pages(
                pages,
                estimated_mb=estimated_mb,
                split_enabled=options.split_export,
                max_mb_per_file=options.max_file_size_mb,
                preview=preview_only,
            )
            if len(partitions) > 1:
                logger.info(
                    "estimated %.2f MB exceeds %.2f MB per file -> splitting into %d files",
                    estimated_mb, options.max_file_size_mb, len(partitions),
                )

            self._transition(ExportState.RENDERING)
            self._report(5, "Preparing export...")
            part_count = len(partitions)
            percent = 10.0
            for partition in partitions:
                partition_number = partition.number
                self._report(percent, f"Generating file {partition.number} of {part_count}...")
                job = RenderJob(
                    file_name=output_file_name(options.file_prefix, partition.number, part_count),
                    part_number=partition.number,
                    part_count=part_count,
                    slides=build_slide_specs(partition, part_count, columns, options),
                    options=options,
                )
                try:
                    path = self.renderer.render(job, output_dir)
                except RenderError as e:
                    e.rendered_files = list(rendered)
                    raise
                except Exception as e:
                    raise RenderError(f"failed to render {job.file_name}: {e}", rendered) from e
                rendered.append(path)
                logger.info("wrote %s (%d slides)", path, len(partition))
                percent = 10 + round(partition.number / part_count * 80)
                self._report(percent, f"Generated file {partition.number} of {part_count}.")
            partition_number = NO_PARTITION

        except Exception as e:
            self._fail(e, partition_number)
            raise

        self._report(100, "Export complete.")
        self._transition(ExportState.DONE)
        end_time = datetime.now(UTC)
        return ExportResult(
            files=rendered,
            page_count=len(pages),
            row_count=row_count,
            active_column_count=len(columns),
            estimated_mb=estimated_mb,
            preview=preview_only,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            partition_sizes=[len(p) for p in partitions],
        )
