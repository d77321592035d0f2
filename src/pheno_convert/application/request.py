"""Build a normalized conversion request from raw selector flags."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from pheno_convert.application.options import ConversionOptions, RequestFlags
from pheno_convert.errors import RequestValidationError, UsageError
from pheno_convert.schemas import ConversionRequestConfig
from pheno_convert.types import InputFormat, OutputFormat

logger = logging.getLogger(__name__)

DEFAULT_INPUT_FILENAME = "individuals.json"
DEFAULT_OUTPUT_FILENAME = "individuals.json"
DEFAULT_OUTPUT_FORMAT = OutputFormat.BEACON


@dataclass(frozen=True)
class ConversionRequest:
    """Normalized, immutable description of one conversion job.

    Parameters
    ----------
    input_kind : InputFormat
        Data model of the source document.
    output_kind : OutputFormat
        Data model to produce.
    input_path : Path
        Source document path.
    output_path : Path
        Destination path, always inside the output directory.
    dictionary_path : Path | None, default=None
        REDCap data dictionary; required when ``input_kind`` is ``redcap``.
    options : ConversionOptions
        Auxiliary flags forwarded to the engine unchanged.
    """

    input_kind: InputFormat
    output_kind: OutputFormat
    input_path: Path
    output_path: Path
    dictionary_path: Path | None = None
    options: ConversionOptions = ConversionOptions()


def build_conversion_request(flags: RequestFlags) -> ConversionRequest:
    """Translate selector flags into a validated conversion request.

    Input selectors are tried in a fixed order (phenopacket, beacon,
    redcap) and the first one present wins unless ``flags.strict`` is set.
    A missing output selector falls back to Beacon output.

    Parameters
    ----------
    flags : RequestFlags
        Raw flag values.

    Returns
    -------
    ConversionRequest
        Request ready for dispatch.

    Raises
    ------
    UsageError
        If no input selector is present, or several selectors are present
        in strict mode.
    RequestValidationError
        If the output directory does not exist, a REDCap input has no
        dictionary, or a path is malformed.
    """
    input_kind, input_value = _resolve_input(flags)
    output_kind, output_value = _resolve_output(flags)

    out_dir = Path(flags.out_dir)
    if not out_dir.is_dir():
        raise RequestValidationError(f"Output directory '{out_dir}' does not exist.")

    dictionary = _present(flags.dictionary)
    if input_kind is InputFormat.REDCAP and dictionary is None:
        raise RequestValidationError(
            "REDCap input requires a data dictionary. Pass --redcap-dictionary."
        )

    output_name = Path(output_value or DEFAULT_OUTPUT_FILENAME)
    if output_name.is_absolute() or ".." in output_name.parts:
        raise RequestValidationError(
            f"Output filename '{output_name}' must be relative to the output "
            "directory and stay inside it."
        )

    try:
        config = ConversionRequestConfig(
            input_kind=input_kind,
            output_kind=output_kind,
            input_path=Path(input_value or DEFAULT_INPUT_FILENAME),
            output_path=out_dir / output_name,
            dictionary_path=Path(dictionary) if dictionary is not None else None,
        )
    except ValidationError as exc:
        raise RequestValidationError(f"Invalid conversion request: {exc}") from exc

    request = ConversionRequest(
        input_kind=config.input_kind,
        output_kind=config.output_kind,
        input_path=config.input_path,
        output_path=config.output_path,
        dictionary_path=config.dictionary_path,
        options=flags.options,
    )
    logger.debug(
        "Resolved conversion request %s -> %s (%s -> %s)",
        request.input_kind,
        request.output_kind,
        request.input_path,
        request.output_path,
    )
    return request


def _resolve_input(flags: RequestFlags) -> tuple[InputFormat, str]:
    selectors = [
        (InputFormat.PHENOPACKET, flags.ipxf),
        (InputFormat.BEACON, flags.ibff),
        (InputFormat.REDCAP, flags.iredcap),
    ]
    present = _present_selectors(selectors)
    if not present:
        raise UsageError(
            "No input file was supplied. Use one of "
            + ", ".join(f"--i{kind.alias}" for kind, _ in selectors)
            + "."
        )
    if flags.strict and len(present) > 1:
        raise UsageError(
            "Multiple input formats supplied ("
            + ", ".join(f"--i{kind.alias}" for kind, _ in present)
            + "); pass exactly one."
        )
    return present[0]


def _resolve_output(flags: RequestFlags) -> tuple[OutputFormat, str | None]:
    selectors = [
        (OutputFormat.PHENOPACKET, flags.opxf),
        (OutputFormat.BEACON, flags.obff),
    ]
    present = _present_selectors(selectors)
    if not present:
        return DEFAULT_OUTPUT_FORMAT, None
    if flags.strict and len(present) > 1:
        raise UsageError(
            "Multiple output formats supplied ("
            + ", ".join(f"--o{kind.alias}" for kind, _ in present)
            + "); pass at most one."
        )
    return present[0]


def _present_selectors[K](
    selectors: Sequence[tuple[K, str | None]],
) -> list[tuple[K, str]]:
    present: list[tuple[K, str]] = []
    for kind, raw in selectors:
        value = _present(raw)
        if value is not None:
            present.append((kind, value))
    return present


def _present(value: str | None) -> str | None:
    """Return ``value`` when it carries a non-blank string, else ``None``."""
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None
