"""Application ports for the engine and writer collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pheno_convert.types import Document


class ConversionEngine(Protocol):
    """Perform schema-to-schema transformations.

    An engine exposes one zero-argument method per supported operation,
    named ``<input>2<output>`` (for example ``phenopacket2beacon``).
    """

    def phenopacket2beacon(self) -> Document:
        """Convert Phenopackets into Beacon v2 individuals."""

    def beacon2phenopacket(self) -> Document:
        """Convert Beacon v2 individuals into Phenopackets."""

    def redcap2beacon(self) -> Document:
        """Convert a REDCap export into Beacon v2 individuals."""

    def redcap2phenopacket(self) -> Document:
        """Convert a REDCap export into Phenopackets."""


class OutputWriter(Protocol):
    """Persist a converted document."""

    def write(self, path: Path, document: Document) -> Path:
        """Serialize ``document`` to ``path`` and return the written path."""
