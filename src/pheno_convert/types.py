"""Shared format tags and type aliases for conversion modules."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class InputFormat(StrEnum):
    """Data models accepted as conversion input."""

    PHENOPACKET = "phenopacket"
    BEACON = "beacon"
    REDCAP = "redcap"

    @property
    def alias(self) -> str:
        """Short tag used to build CLI flag names (``--ipxf``)."""
        return _ALIASES[self.value]


class OutputFormat(StrEnum):
    """Data models that can be produced by a conversion."""

    PHENOPACKET = "phenopacket"
    BEACON = "beacon"

    @property
    def alias(self) -> str:
        """Short tag used to build CLI flag names (``--obff``)."""
        return _ALIASES[self.value]


_ALIASES: dict[str, str] = {
    "phenopacket": "pxf",
    "beacon": "bff",
    "redcap": "redcap",
}

type Scalar = str | int | float | bool | None
type Document = Scalar | list["Document"] | dict[str, "Document"]

type OptionScalar = str | int | float | bool | None | Path
type OptionValue = (
    OptionScalar
    | tuple["OptionValue", ...]
    | list["OptionValue"]
    | dict[str, "OptionValue"]
)
