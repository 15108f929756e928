from .reader import format_hint_for, parse, parse_csv, parse_json, read_table_file

__all__ = [
    "format_hint_for",
    "parse",
    "parse_csv",
    "parse_json",
    "read_table_file",
]
