from __future__ import annotations

from ..models.export_result import ExportResult

"""SUMMARY line rendering for a finished export."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very short runs
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ExportResult) -> str:
    """Render the SUMMARY line for ``result``.

    Format:
    SUMMARY files={n} pages={p} rows={r} columns={c} estimated_mb={x.xx}
    preview={true|false} elapsed_sec={s}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ExportResult(
        ...     files=[], page_count=3, row_count=45, active_column_count=2,
        ...     estimated_mb=0.123, preview=False, start_time=t, end_time=t,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=0 pages=3 rows=45 columns=2 estimated_mb=0.12 preview=false elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.file_count} "
        f"pages={result.page_count} "
        f"rows={result.row_count} "
        f"columns={result.active_column_count} "
        f"estimated_mb={result.estimated_mb:.2f} "
        f"preview={'true' if result.preview else 'false'} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
