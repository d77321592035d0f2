"""Built-in reference conversion engine.

The engine carries the core identity, sex, disease and phenotypic feature
fields between Phenopacket and Beacon v2 individuals, and lifts REDCap
export rows into Beacon individuals. Richer mappings are provided by
external engines loaded through ``--engine-module``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pheno_convert.adapters.readers import load_records, load_redcap_rows
from pheno_convert.application.options import EngineConfig
from pheno_convert.errors import ConversionError, EngineError
from pheno_convert.schemas import BuiltinEngineOptions
from pheno_convert.types import Document

logger = logging.getLogger(__name__)

# Phenopacket sex enum <-> NCIt terms used by Beacon v2 individuals.
_SEX_TO_BEACON: dict[str, dict[str, str]] = {
    "MALE": {"id": "NCIT:C20197", "label": "male"},
    "FEMALE": {"id": "NCIT:C16576", "label": "female"},
    "UNKNOWN_SEX": {"id": "NCIT:C17998", "label": "unknown"},
}
_SEX_FROM_BEACON: dict[str, str] = {
    term["id"]: name for name, term in _SEX_TO_BEACON.items()
}


class BuiltinEngine:
    """Engine bound to a single input document."""

    def __init__(
        self,
        input_path: Path,
        dictionary_path: Path | None,
        options: BuiltinEngineOptions,
    ) -> None:
        self.input_path = input_path
        self.dictionary_path = dictionary_path
        self.options = options

    def phenopacket2beacon(self) -> Document:
        """Convert Phenopackets into Beacon v2 individuals."""
        records, single = self._load()
        individuals = [self._pxf_to_bff(record) for record in records]
        return individuals[0] if single else individuals

    def beacon2phenopacket(self) -> Document:
        """Convert Beacon v2 individuals into Phenopackets."""
        records, single = self._load()
        phenopackets = [_bff_to_pxf(record) for record in records]
        return phenopackets[0] if single else phenopackets

    def redcap2beacon(self) -> Document:
        """Convert REDCap export rows into Beacon v2 individuals."""
        return [self._redcap_to_bff(row) for row in self._load_redcap()]

    def redcap2phenopacket(self) -> Document:
        """Convert REDCap export rows into Phenopackets via Beacon v2."""
        return [
            _bff_to_pxf(self._redcap_to_bff(row)) for row in self._load_redcap()
        ]

    def _load(self) -> tuple[list[dict[str, Any]], bool]:
        records, single = load_records(self.input_path)
        logger.info("Loaded %d record(s) from %s", len(records), self.input_path)
        return records, single

    def _load_redcap(self) -> list[dict[str, str]]:
        if self.dictionary_path is None or not self.dictionary_path.is_file():
            raise ConversionError(
                f"REDCap dictionary not found: {self.dictionary_path}"
            )
        rows = load_redcap_rows(
            self.input_path,
            separator=self.options.separator,
            id_field=self.options.id_field,
        )
        logger.info("Loaded %d REDCap row(s) from %s", len(rows), self.input_path)
        return rows

    def _pxf_to_bff(self, phenopacket: Mapping[str, Any]) -> dict[str, Any]:
        subject = phenopacket.get("subject") or {}
        identifier = subject.get("id") or phenopacket.get("id")
        if not identifier:
            raise ConversionError("Phenopacket has neither 'subject.id' nor 'id'.")

        individual: dict[str, Any] = {"id": identifier}
        sex = subject.get("sex")
        if sex is not None:
            individual["sex"] = _SEX_TO_BEACON.get(
                str(sex).upper(), _SEX_TO_BEACON["UNKNOWN_SEX"]
            )
        diseases = [
            {"diseaseCode": disease["term"]}
            for disease in phenopacket.get("diseases") or []
            if "term" in disease
        ]
        if diseases:
            individual["diseases"] = diseases
        features = [
            _feature_to_bff(feature)
            for feature in phenopacket.get("phenotypicFeatures") or []
            if "type" in feature
        ]
        if features:
            individual["phenotypicFeatures"] = features
        if self.options.print_hidden_labels:
            individual["info"] = {"phenopacket": dict(phenopacket)}
        return individual

    def _redcap_to_bff(self, row: Mapping[str, str]) -> dict[str, Any]:
        identifier = row.get(self.options.id_field)
        if not identifier:
            raise ConversionError(
                f"REDCap row without '{self.options.id_field}' value: {dict(row)}"
            )
        individual: dict[str, Any] = {"id": identifier}
        if self.options.print_hidden_labels:
            individual["info"] = {"redcap": dict(row)}
        return individual


def _feature_to_bff(feature: Mapping[str, Any]) -> dict[str, Any]:
    converted: dict[str, Any] = {"featureType": feature["type"]}
    if "excluded" in feature:
        converted["excluded"] = bool(feature["excluded"])
    return converted


def _bff_to_pxf(individual: Mapping[str, Any]) -> dict[str, Any]:
    identifier = individual.get("id")
    if not identifier:
        raise ConversionError("Beacon individual has no 'id'.")

    subject: dict[str, Any] = {"id": identifier}
    sex = individual.get("sex")
    if isinstance(sex, Mapping):
        subject["sex"] = _SEX_FROM_BEACON.get(str(sex.get("id")), "UNKNOWN_SEX")

    phenopacket: dict[str, Any] = {"id": identifier, "subject": subject}
    diseases = [
        {"term": disease["diseaseCode"]}
        for disease in individual.get("diseases") or []
        if "diseaseCode" in disease
    ]
    if diseases:
        phenopacket["diseases"] = diseases
    features = []
    for feature in individual.get("phenotypicFeatures") or []:
        if "featureType" not in feature:
            continue
        converted: dict[str, Any] = {"type": feature["featureType"]}
        if "excluded" in feature:
            converted["excluded"] = bool(feature["excluded"])
        features.append(converted)
    if features:
        phenopacket["phenotypicFeatures"] = features
    return phenopacket


class BuiltinEngineFactory:
    """Create :class:`BuiltinEngine` instances from engine configuration."""

    name = "builtin"
    operations = frozenset(
        {
            "phenopacket2beacon",
            "beacon2phenopacket",
            "redcap2beacon",
            "redcap2phenopacket",
        }
    )

    def create(self, config: EngineConfig) -> BuiltinEngine:
        """Validate forwarded options and bind an engine to the input file.

        Raises
        ------
        EngineError
            If forwarded options are invalid for this engine.
        """
        try:
            options = BuiltinEngineOptions.model_validate(config.options.as_dict())
        except ValidationError as exc:
            raise EngineError(f"Invalid builtin engine options: {exc}") from exc
        return BuiltinEngine(
            input_path=config.input_path,
            dictionary_path=config.dictionary_path,
            options=options,
        )
