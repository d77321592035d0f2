"""Convert clinical/phenotypic data between Phenopacket, Beacon v2 and REDCap."""

from __future__ import annotations

from pheno_convert.types import InputFormat, OutputFormat

__version__ = "0.1.0"

__all__ = ["InputFormat", "OutputFormat", "__version__"]
