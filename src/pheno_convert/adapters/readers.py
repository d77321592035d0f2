"""Readers for source documents handed to the built-in engine."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import yaml

from pheno_convert.errors import ConversionError
from pheno_convert.types import Document

YAML_SUFFIXES = frozenset({".yaml", ".yml"})

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _DocumentLoader(yaml.SafeLoader):
    """Safe loader leaving dates and timestamps as their source strings."""


_DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_document(path: Path) -> Document:
    """Load a JSON or YAML document, picking the parser by file suffix.

    Raises
    ------
    ConversionError
        If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConversionError(f"Unable to read input file {path}: {exc}") from exc

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.load(text, Loader=_DocumentLoader)
        except yaml.YAMLError as exc:
            raise ConversionError(f"Invalid YAML in {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConversionError(f"Invalid JSON in {path}: {exc}") from exc


def load_records(path: Path) -> tuple[list[dict[str, object]], bool]:
    """Load a document expected to hold one object or a list of objects.

    Returns the records and whether the document was a single object.
    """
    document = load_document(path)
    if isinstance(document, dict):
        return [document], True
    if isinstance(document, list) and all(isinstance(item, dict) for item in document):
        return list(document), False
    raise ConversionError(
        f"Expected an object or a list of objects in {path}, "
        f"found {type(document).__name__}."
    )


def load_redcap_rows(
    path: Path, *, separator: str = ",", id_field: str = "record_id"
) -> list[dict[str, str]]:
    """Load REDCap export rows as header-keyed dictionaries.

    Blank cells are dropped; values are kept as exported.
    """
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle, delimiter=separator)
            fieldnames = reader.fieldnames or []
            if id_field not in fieldnames:
                raise ConversionError(
                    f"REDCap export {path} has no '{id_field}' column."
                )
            rows = [
                {key: value for key, value in row.items() if key and value}
                for row in reader
            ]
    except OSError as exc:
        raise ConversionError(f"Unable to read REDCap export {path}: {exc}") from exc
    except csv.Error as exc:
        raise ConversionError(f"Malformed REDCap export {path}: {exc}") from exc
    return rows
