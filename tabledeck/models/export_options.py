from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

"""ExportOptions snapshot and the input coercion rules behind it.

An ExportOptions instance is taken once when an export starts; later edits to the
source mapping (UI fields, config file) never reach an export that is already running.
Every field is coerced leniently: malformed values fall back to a default rather than
failing, except preview_page_count which the orchestrator validates on preview.
"""

__all__ = [
    "ExportOptions",
    "VALIGN_VALUES",
    "sanitize_hex",
    "to_number",
    "to_positive_whole_number",
    "strip_pptx_suffix",
]

VALIGN_VALUES = ("top", "middle", "bottom")

_NON_HEX = re.compile(r"[^0-9a-fA-F]")
_WHOLE_NUMBER = re.compile(r"^\d+$")


def sanitize_hex(value: Any, fallback: str = "000000") -> str:
    """Normalize a color to 6 upper-case hex digits.

    Non-hex characters (e.g. a leading ``#``) are dropped and the first six digits kept.
    Anything with fewer than six digits is malformed and becomes ``fallback``.
    """
    digits = _NON_HEX.sub("", str(value if value is not None else ""))[:6]
    if len(digits) < 6:
        return fallback
    return digits.upper()


def to_number(value: Any, fallback: float) -> float:
    """Numeric-with-fallback: finite numbers pass, everything else returns ``fallback``."""
    if isinstance(value, bool):
        return fallback
    try:
        num = float(value)
    except (TypeError, ValueError):
        return fallback
    return num if math.isfinite(num) else fallback


def to_positive_whole_number(value: Any, fallback: int | None) -> int | None:
    """Return ``value`` as a positive int when it is written as digits only, else ``fallback``."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value if value > 0 else fallback
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else fallback
    normalized = str(value if value is not None else "").strip()
    if not _WHOLE_NUMBER.match(normalized):
        return fallback
    num = int(normalized)
    return num if num > 0 else fallback


def strip_pptx_suffix(prefix: str) -> str:
    return prefix[: -len(".pptx")] if prefix.endswith(".pptx") else prefix


def _to_positive(value: Any, fallback: float, *, allow_zero: bool = False) -> float:
    """to_number, with out-of-range values (<= 0, or < 0 when ``allow_zero``) -> ``fallback``."""
    num = to_number(value, fallback)
    if num < 0 or (num == 0 and not allow_zero):
        return fallback
    return num


def _to_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1", "bold"}:
            return True
        if lowered in {"false", "no", "off", "0", "normal", ""}:
            return False
    return fallback


@dataclass(frozen=True)
class ExportOptions:
    """Immutable per-export configuration (title, paging, styling, splitting)."""
    title: str = "Uploaded Data Table"
    file_prefix: str = "uploaded-table"
    rows_per_page: int = 20
    # None when the configured value is not a positive whole number
    preview_page_count: int | None = 2
    header_fill: str = "1F2937"
    header_text: str = "FFFFFF"
    body_fill: str = "FFFFFF"
    body_text: str = "111827"
    border_color: str = "CBD5E1"
    header_font_size: float = 13
    body_font_size: float = 12
    header_bold: bool = True
    body_bold: bool = False
    body_italic: bool = False
    row_height: float = 0.45
    cell_margin: float = 0.04
    valign: str = "middle"
    autofit: bool = False
    include_notes: bool = False
    split_export: bool = True
    max_file_size_mb: float = 8

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> ExportOptions:
        """Build a snapshot from loosely typed input, applying the coercion rules.

        Unknown keys are ignored; missing keys take the defaults.
        """
        raw = dict(raw or {})
        d = cls()

        title = str(raw.get("title", "") or "").strip() or d.title
        prefix = str(raw.get("file_prefix", "") or "").strip() or d.file_prefix

        rows_per_page = to_number(raw.get("rows_per_page", d.rows_per_page), d.rows_per_page)
        max_mb = to_number(raw.get("max_file_size_mb", d.max_file_size_mb), d.max_file_size_mb)

        valign = str(raw.get("valign", d.valign) or "").strip().lower()
        if valign not in VALIGN_VALUES:
            valign = d.valign

        return cls(
            title=title,
            file_prefix=strip_pptx_suffix(prefix) or d.file_prefix,
            rows_per_page=max(1, math.floor(rows_per_page)),
            preview_page_count=to_positive_whole_number(
                raw.get("preview_page_count", d.preview_page_count), None
            ),
            header_fill=sanitize_hex(raw.get("header_fill", d.header_fill)),
            header_text=sanitize_hex(raw.get("header_text", d.header_text)),
            body_fill=sanitize_hex(raw.get("body_fill", d.body_fill)),
            body_text=sanitize_hex(raw.get("body_text", d.body_text)),
            border_color=sanitize_hex(raw.get("border_color", d.border_color)),
            header_font_size=_to_positive(raw.get("header_font_size"), d.header_font_size),
            body_font_size=_to_positive(raw.get("body_font_size"), d.body_font_size),
            header_bold=_to_bool(raw.get("header_bold"), d.header_bold),
            body_bold=_to_bool(raw.get("body_bold"), d.body_bold),
            body_italic=_to_bool(raw.get("body_italic"), d.body_italic),
            row_height=_to_positive(raw.get("row_height"), d.row_height),
            cell_margin=_to_positive(raw.get("cell_margin"), d.cell_margin, allow_zero=True),
            valign=valign,
            autofit=_to_bool(raw.get("autofit"), d.autofit),
            include_notes=_to_bool(raw.get("include_notes"), d.include_notes),
            split_export=_to_bool(raw.get("split_export"), d.split_export),
            max_file_size_mb=max(1.0, max_mb),
        )

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]
