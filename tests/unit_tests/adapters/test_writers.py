"""Unit tests for the atomic document writer."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from pheno_convert.adapters.writers import DocumentWriter
from pheno_convert.errors import OutputWriteError

DOCUMENT = [{"id": "P1", "label": "café", "features": [{"excluded": True}]}]


def test_writes_json_by_default(tmp_path: Path) -> None:
    """Serialize JSON with indentation and a trailing newline."""
    target = tmp_path / "out.json"
    assert DocumentWriter().write(target, DOCUMENT) == target

    text = target.read_text(encoding="utf-8")
    assert json.loads(text) == DOCUMENT
    assert text.endswith("\n")
    assert "café" in text


@pytest.mark.parametrize("suffix", [".yaml", ".yml", ".YAML"])
def test_writes_yaml_for_yaml_suffix(tmp_path: Path, suffix: str) -> None:
    """Pick YAML serialization from the target suffix."""
    target = tmp_path / f"out{suffix}"
    DocumentWriter().write(target, DOCUMENT)
    assert yaml.safe_load(target.read_text(encoding="utf-8")) == DOCUMENT


def test_overwrites_existing_file(tmp_path: Path) -> None:
    """Replace an existing output file."""
    target = tmp_path / "out.json"
    target.write_text("stale", encoding="utf-8")
    DocumentWriter().write(target, {"id": "new"})
    assert json.loads(target.read_text(encoding="utf-8")) == {"id": "new"}


def test_no_temporary_files_left(tmp_path: Path) -> None:
    """Leave only the target file behind after a successful write."""
    DocumentWriter().write(tmp_path / "out.json", DOCUMENT)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.json"]


def test_repeated_writes_are_byte_identical(tmp_path: Path) -> None:
    """Serialize the same document to the same bytes."""
    writer = DocumentWriter()
    target = tmp_path / "out.json"
    writer.write(target, DOCUMENT)
    first = target.read_bytes()
    writer.write(target, DOCUMENT)
    assert target.read_bytes() == first


def test_unserializable_document_raises(tmp_path: Path) -> None:
    """Fail before touching the filesystem when serialization fails."""
    target = tmp_path / "out.json"
    with pytest.raises(OutputWriteError, match="cannot be serialized"):
        DocumentWriter().write(target, {"bad": object()})  # type: ignore[dict-item]
    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_missing_directory_raises(tmp_path: Path) -> None:
    """Wrap filesystem failures into OutputWriteError."""
    with pytest.raises(OutputWriteError, match="Unable to write"):
        DocumentWriter().write(tmp_path / "missing" / "out.json", DOCUMENT)


def test_failed_replace_cleans_up(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Remove the temporary file and keep the previous output on failure."""
    target = tmp_path / "out.json"
    target.write_text("previous", encoding="utf-8")

    def fail_replace(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)
    with pytest.raises(OutputWriteError, match="disk full"):
        DocumentWriter().write(target, DOCUMENT)

    assert target.read_text(encoding="utf-8") == "previous"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.json"]
