"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from pheno_convert.adapters.writers import DocumentWriter
from pheno_convert.application.dispatch import dispatch
from pheno_convert.application.options import ConversionOptions, RequestFlags
from pheno_convert.application.ports import OutputWriter
from pheno_convert.application.request import (
    ConversionRequest,
    build_conversion_request,
)
from pheno_convert.application.results import ConversionResult
from pheno_convert.engines.registry import (
    DEFAULT_ENGINE,
    EngineRegistry,
    create_default_registry,
)
from pheno_convert.errors import EngineError
from pheno_convert.schemas import EngineResolutionConfig
from pheno_convert.types import OptionValue


def convert_request(
    request: ConversionRequest,
    *,
    engine_name: str = DEFAULT_ENGINE,
    engine_modules: Iterable[str] | None = None,
    registry: EngineRegistry | None = None,
    writer: OutputWriter | None = None,
) -> ConversionResult:
    """Use-case: resolve an engine and dispatch a validated request."""
    try:
        resolution = EngineResolutionConfig(
            engine_name=engine_name,
            engine_modules=list(engine_modules or []),
        )
    except ValidationError as exc:
        raise EngineError(f"Invalid engine selection: {exc}") from exc

    if registry is None:
        registry = create_default_registry(extra_modules=resolution.engine_modules)
    else:
        for module in resolution.engine_modules:
            registry.load_module(module)

    return dispatch(
        request,
        engine_factory=registry.get(resolution.engine_name),
        writer=writer or DocumentWriter(),
    )


def convert_flags(
    flags: RequestFlags,
    *,
    engine_name: str = DEFAULT_ENGINE,
    engine_modules: Iterable[str] | None = None,
    registry: EngineRegistry | None = None,
    writer: OutputWriter | None = None,
) -> ConversionResult:
    """Use-case: build a request from raw flags, then convert it."""
    request = build_conversion_request(flags)
    return convert_request(
        request,
        engine_name=engine_name,
        engine_modules=engine_modules,
        registry=registry,
        writer=writer,
    )


def build_conversion_options(
    *,
    print_hidden_labels: bool = False,
    verbose: bool = False,
    debug: int = 0,
    extra: Mapping[str, OptionValue] | None = None,
) -> ConversionOptions:
    """Build typed option object from command/API params."""
    return ConversionOptions(
        print_hidden_labels=print_hidden_labels,
        verbose=verbose,
        debug=debug,
        extra=dict(extra or {}),
    )
