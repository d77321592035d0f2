"""Unit tests for source document readers."""

from __future__ import annotations

from pathlib import Path

import pytest

from pheno_convert.adapters.readers import (
    load_document,
    load_records,
    load_redcap_rows,
)
from pheno_convert.errors import ConversionError


def test_load_json_and_yaml(tmp_path: Path) -> None:
    """Parse JSON by default and YAML by suffix."""
    json_path = tmp_path / "doc.json"
    json_path.write_text('{"id": "a"}', encoding="utf-8")
    yaml_path = tmp_path / "doc.yml"
    yaml_path.write_text("id: a\n", encoding="utf-8")

    assert load_document(json_path) == {"id": "a"}
    assert load_document(yaml_path) == {"id": "a"}


def test_invalid_json_raises(tmp_path: Path) -> None:
    """Report undecodable JSON as a conversion failure."""
    path = tmp_path / "doc.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConversionError, match="Invalid JSON"):
        load_document(path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Report undecodable YAML as a conversion failure."""
    path = tmp_path / "doc.yaml"
    path.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConversionError, match="Invalid YAML"):
        load_document(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    """Report unreadable input as a conversion failure."""
    with pytest.raises(ConversionError, match="Unable to read"):
        load_document(tmp_path / "missing.json")


def test_load_records_shapes(tmp_path: Path) -> None:
    """Accept one object or a list of objects and report which."""
    single = tmp_path / "single.json"
    single.write_text('{"id": "a"}', encoding="utf-8")
    many = tmp_path / "many.json"
    many.write_text('[{"id": "a"}, {"id": "b"}]', encoding="utf-8")
    scalar = tmp_path / "scalar.json"
    scalar.write_text("3", encoding="utf-8")

    assert load_records(single) == ([{"id": "a"}], True)
    assert load_records(many) == ([{"id": "a"}, {"id": "b"}], False)
    with pytest.raises(ConversionError, match="found int"):
        load_records(scalar)


def test_load_redcap_rows_drops_blank_cells(tmp_path: Path) -> None:
    """Key rows by header and drop empty values."""
    path = tmp_path / "export.csv"
    path.write_text("record_id,sex,notes\n1,2,\n2,,text\n", encoding="utf-8")
    assert load_redcap_rows(path) == [
        {"record_id": "1", "sex": "2"},
        {"record_id": "2", "notes": "text"},
    ]


def test_load_redcap_rows_custom_separator(tmp_path: Path) -> None:
    """Honor a non-comma separator."""
    path = tmp_path / "export.csv"
    path.write_text("record_id;sex\n1;2\n", encoding="utf-8")
    assert load_redcap_rows(path, separator=";") == [{"record_id": "1", "sex": "2"}]


def test_load_redcap_rows_requires_id_column(tmp_path: Path) -> None:
    """Reject exports lacking the identifier column."""
    path = tmp_path / "export.csv"
    path.write_text("id,sex\n1,2\n", encoding="utf-8")
    with pytest.raises(ConversionError, match="no 'record_id' column"):
        load_redcap_rows(path)


def test_yaml_timestamps_stay_strings(tmp_path: Path) -> None:
    """Keep YAML dates and timestamps as the strings written in the file."""
    path = tmp_path / "pxf.yaml"
    path.write_text(
        "metaData:\n  created: 2021-05-14T10:35:00Z\n  day: 2021-05-14\n",
        encoding="utf-8",
    )
    assert load_document(path) == {
        "metaData": {"created": "2021-05-14T10:35:00Z", "day": "2021-05-14"}
    }
