"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pheno_convert.application.options import (
    ConversionOptions,
    EngineConfig,
    RequestFlags,
)
from pheno_convert.application.ports import ConversionEngine, OutputWriter
from pheno_convert.application.results import ConversionResult
from pheno_convert.types import OptionValue


def build_conversion_options(
    *,
    print_hidden_labels: bool = False,
    verbose: bool = False,
    debug: int = 0,
    extra: Mapping[str, OptionValue] | None = None,
) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from pheno_convert.application.use_cases import build_conversion_options as _impl

    return _impl(
        print_hidden_labels=print_hidden_labels,
        verbose=verbose,
        debug=debug,
        extra=extra,
    )


def convert_flags(
    flags: RequestFlags,
    *,
    engine_name: str = "builtin",
    engine_modules: Iterable[str] | None = None,
    writer: OutputWriter | None = None,
) -> ConversionResult:
    """Build and run a conversion request via lazy use-case import."""
    from pheno_convert.application.use_cases import convert_flags as _impl

    return _impl(
        flags,
        engine_name=engine_name,
        engine_modules=engine_modules,
        writer=writer,
    )


__all__ = [
    "ConversionEngine",
    "ConversionOptions",
    "ConversionResult",
    "EngineConfig",
    "OutputWriter",
    "RequestFlags",
    "build_conversion_options",
    "convert_flags",
]
