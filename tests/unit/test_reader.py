from __future__ import annotations

import json
from pathlib import Path

import pytest

from tabledeck.errors import FormatError
from tabledeck.models.table_data import cell_text
from tabledeck.parsing.reader import format_hint_for, parse, parse_csv, parse_json, read_table_file


def test_parse_csv_basic_example():
    data = parse("a,b\n1,2\n3,4", "csv")
    assert data.columns == ["a", "b"]
    assert data.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_parse_csv_trims_lines_and_drops_blank_lines():
    data = parse_csv("  a , b  \r\n\r\n 1 ,2 \n\n   \n3,4\n")
    assert data.columns == ["a", "b"]
    assert data.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_parse_csv_strips_one_quote_each_side():
    data = parse_csv('"name","note"\n"Alice",""quoted""\n')
    assert data.columns == ["name", "note"]
    assert data.rows[0] == {"name": "Alice", "note": '"quoted"'}


def test_parse_csv_short_row_fills_missing_with_empty_string():
    data = parse_csv("a,b,c\n1\n1,2,3,4")
    assert data.rows[0] == {"a": "1", "b": "", "c": ""}
    # extra cells are ignored
    assert data.rows[1] == {"a": "1", "b": "2", "c": "3"}


@pytest.mark.parametrize("text", ["", "\n\n", "only,header\n", "   \n a,b \n  "])
def test_parse_csv_requires_header_and_one_row(text):
    with pytest.raises(FormatError, match="header row and at least one data row"):
        parse_csv(text)


def test_parse_csv_duplicate_headers_last_value_wins():
    data = parse_csv("x,x\n1,2")
    assert data.columns == ["x", "x"]
    assert data.rows == [{"x": "2"}]


def test_parse_json_array_of_arrays():
    data = parse_json('[["h1", "h2"], ["x", "y"], ["z"]]')
    assert data.columns == ["h1", "h2"]
    assert data.rows == [{"h1": "x", "h2": "y"}, {"h1": "z", "h2": ""}]


def test_parse_json_rows_property_matches_csv():
    from_json = parse('{"rows": [["h1", "h2"], ["x", "y"]]}', "json")
    from_csv = parse("h1,h2\nx,y", "csv")
    assert from_json == from_csv


def test_parse_json_array_of_objects_uses_first_object_keys():
    text = json.dumps([{"b": 1, "a": 2}, {"a": 3, "c": 4}])
    data = parse_json(text)
    assert data.columns == ["b", "a"]
    # rows are kept verbatim
    assert data.rows == [{"b": 1, "a": 2}, {"a": 3, "c": 4}]


def test_parse_json_rows_property_of_objects():
    data = parse_json('{"rows": [{"k": "v"}], "meta": {"ignored": true}}')
    assert data.columns == ["k"]
    assert data.rows == [{"k": "v"}]


def test_parse_json_header_cells_converted_to_text():
    data = parse_json('[[1, null, true], ["a", "b", "c"]]')
    assert data.columns == ["1", "", "true"]


def test_parse_json_null_cells_read_as_empty():
    data = parse_json('[["a", "b"], [null, 5]]')
    assert data.rows == [{"a": "", "b": 5}]


def test_parse_json_non_array_data_row_reads_as_empty():
    data = parse_json('[["a", "b"], {"a": 1}]')
    assert data.rows == [{"a": "", "b": ""}]


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        '{"rows": []}',
        '{"rows": "nope"}',
        "[]",
        "42",
        '"text"',
    ],
)
def test_parse_json_rejects_missing_or_empty_row_source(text):
    with pytest.raises(FormatError, match="non-empty rows array"):
        parse_json(text)


def test_parse_json_rejects_invalid_json():
    with pytest.raises(FormatError, match="invalid JSON"):
        parse_json("{not json")


def test_parse_json_rejects_scalar_rows():
    with pytest.raises(FormatError, match="objects"):
        parse_json("[1, 2, 3]")


def test_parse_is_deterministic(sample_csv_text, sample_json_text):
    assert parse(sample_csv_text, "csv") == parse(sample_csv_text, "csv")
    assert parse(sample_json_text, "json") == parse(sample_json_text, "json")


def test_parse_rejects_unknown_hint():
    with pytest.raises(FormatError, match="unsupported format"):
        parse("a,b\n1,2", "xlsx")


@pytest.mark.parametrize(
    ("name", "expected"),
    [("data.csv", "csv"), ("DATA.CSV", "csv"), ("data.json", "json"), ("data.txt", "json"), ("data", "json")],
)
def test_format_hint_for(name, expected):
    assert format_hint_for(name) == expected


def test_read_table_file_uses_extension(temp_workdir: Path):
    csv_path = temp_workdir / "data" / "t.csv"
    csv_path.write_text("\ufeffa,b\n1,2\n", encoding="utf-8")
    json_path = temp_workdir / "data" / "t.txt"
    json_path.write_text('[["a", "b"], ["1", "2"]]', encoding="utf-8")

    assert read_table_file(csv_path).columns == ["a", "b"]
    assert read_table_file(json_path).rows == [{"a": "1", "b": "2"}]


def test_read_table_file_missing(temp_workdir: Path):
    with pytest.raises(FormatError, match="cannot read"):
        read_table_file(temp_workdir / "missing.csv")


def test_parse_json_numbers_keep_values_and_display_like_source():
    data = parse_json('[{"n": 1.0, "m": 3, "x": 0.5}]')
    assert [cell_text(data.rows[0][c]) for c in data.columns] == ["1", "3", "0.5"]
