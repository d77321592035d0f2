"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pheno_convert.types import InputFormat, OutputFormat


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome."""

    output_path: Path
    operation: str
    input_kind: InputFormat
    output_kind: OutputFormat
    source_path: Path
