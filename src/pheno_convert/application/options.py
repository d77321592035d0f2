"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pheno_convert.types import OptionValue


@dataclass(frozen=True)
class ConversionOptions:
    """Auxiliary flags forwarded unchanged to the conversion engine."""

    print_hidden_labels: bool = False
    verbose: bool = False
    debug: int = 0
    extra: Mapping[str, OptionValue] = field(default_factory=dict)

    def as_dict(self) -> dict[str, OptionValue]:
        """Flatten flags and free-form engine options into one mapping.

        Named flags win over ``extra`` entries that share their key.
        """
        merged: dict[str, OptionValue] = dict(self.extra)
        merged["print_hidden_labels"] = self.print_hidden_labels
        merged["verbose"] = self.verbose
        merged["debug"] = self.debug
        return merged


@dataclass(frozen=True)
class RequestFlags:
    """Raw selector values as received from the command line.

    Each selector is either ``None`` (absent) or the string given to it.
    """

    ipxf: str | None = None
    ibff: str | None = None
    iredcap: str | None = None
    opxf: str | None = None
    obff: str | None = None
    out_dir: Path | str = "."
    dictionary: str | None = None
    options: ConversionOptions = ConversionOptions()
    strict: bool = False


@dataclass(frozen=True)
class EngineConfig:
    """Configuration record a conversion engine is constructed from."""

    input_path: Path
    dictionary_path: Path | None = None
    options: ConversionOptions = ConversionOptions()
