"""Shared pytest configuration, marker assignment and fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


PHENOPACKET = {
    "id": "PXF-1",
    "subject": {"id": "P1", "sex": "FEMALE"},
    "phenotypicFeatures": [
        {"type": {"id": "HP:0001250", "label": "Seizure"}},
        {"type": {"id": "HP:0000256", "label": "Macrocephaly"}, "excluded": True},
    ],
    "diseases": [{"term": {"id": "MONDO:0005015", "label": "diabetes mellitus"}}],
}


@pytest.fixture
def phenopacket_file(tmp_path: Path) -> Path:
    """Write a single Phenopacket JSON document and return its path."""
    path = tmp_path / "phenopacket.json"
    path.write_text(json.dumps(PHENOPACKET), encoding="utf-8")
    return path


@pytest.fixture
def redcap_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write a REDCap export and data dictionary; return both paths."""
    export = tmp_path / "export.csv"
    export.write_text(
        "record_id,sex,diagnosis\n1,2,crohn\n2,1,\n", encoding="utf-8"
    )
    dictionary = tmp_path / "dictionary.csv"
    dictionary.write_text(
        'Variable / Field Name,Field Type,Choices\nsex,radio,"1, Male | 2, Female"\n',
        encoding="utf-8",
    )
    return export, dictionary
