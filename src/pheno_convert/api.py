"""Public conversion API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from pheno_convert.application.options import RequestFlags
from pheno_convert.application.results import ConversionResult
from pheno_convert.application.use_cases import build_conversion_options
from pheno_convert.application.use_cases import convert_flags as _convert_flags
from pheno_convert.types import OptionValue


def convert(
    *,
    ipxf: str | Path | None = None,
    ibff: str | Path | None = None,
    iredcap: str | Path | None = None,
    opxf: str | None = None,
    obff: str | None = None,
    out_dir: str | Path = ".",
    dictionary: str | Path | None = None,
    print_hidden_labels: bool = False,
    verbose: bool = False,
    debug: int = 0,
    options: Mapping[str, OptionValue] | None = None,
    engine: str = "builtin",
    engine_modules: Iterable[str] | None = None,
    strict: bool = False,
) -> Path:
    """Convert one document and return the path it was written to.

    Parameters
    ----------
    ipxf, ibff, iredcap : str | Path | None
        Input selectors; the first one set (in this order) is used.
    opxf, obff : str | None
        Output selectors holding the output filename. Beacon output named
        ``individuals.json`` is used when both are unset.
    out_dir : str | Path, default="."
        Existing directory receiving the output file.
    dictionary : str | Path | None
        REDCap data dictionary, required with ``iredcap``.
    print_hidden_labels, verbose, debug
        Flags forwarded to the engine.
    options : Mapping[str, OptionValue] | None
        Extra engine-specific options.
    engine : str, default="builtin"
        Registered engine name.
    engine_modules : Iterable[str] | None
        Modules or files registering additional engines.
    strict : bool, default=False
        Reject simultaneous input or output selectors.

    Returns
    -------
    Path
        Path to the written output document.
    """
    flags = RequestFlags(
        ipxf=_optional_str(ipxf),
        ibff=_optional_str(ibff),
        iredcap=_optional_str(iredcap),
        opxf=opxf,
        obff=obff,
        out_dir=out_dir,
        dictionary=_optional_str(dictionary),
        options=build_conversion_options(
            print_hidden_labels=print_hidden_labels,
            verbose=verbose,
            debug=debug,
            extra=options,
        ),
        strict=strict,
    )
    return convert_flags(flags, engine=engine, engine_modules=engine_modules).output_path


def convert_flags(
    flags: RequestFlags,
    *,
    engine: str = "builtin",
    engine_modules: Iterable[str] | None = None,
) -> ConversionResult:
    """Convert from pre-built flags using the default registry and writer."""
    return _convert_flags(flags, engine_name=engine, engine_modules=engine_modules)


def _optional_str(value: str | Path | None) -> str | None:
    return None if value is None else str(value)
