"""Resolve and invoke the conversion operation for a request."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from pheno_convert.application.options import EngineConfig
from pheno_convert.application.ports import OutputWriter
from pheno_convert.application.request import ConversionRequest
from pheno_convert.application.results import ConversionResult
from pheno_convert.engines.base import EngineFactory, declared_operations
from pheno_convert.errors import (
    ConversionError,
    EngineError,
    PhenoConvertError,
    UnsupportedConversionError,
)
from pheno_convert.types import InputFormat, OutputFormat

logger = logging.getLogger(__name__)

OPERATION_SEPARATOR = "2"


def operation_name(input_kind: InputFormat, output_kind: OutputFormat) -> str:
    """Return the engine method name for a format pair (``phenopacket2beacon``)."""
    return f"{input_kind.value}{OPERATION_SEPARATOR}{output_kind.value}"


CONVERSIONS: Mapping[tuple[InputFormat, OutputFormat], str] = MappingProxyType(
    {
        pair: operation_name(*pair)
        for pair in (
            (InputFormat.PHENOPACKET, OutputFormat.BEACON),
            (InputFormat.BEACON, OutputFormat.PHENOPACKET),
            (InputFormat.REDCAP, OutputFormat.BEACON),
            (InputFormat.REDCAP, OutputFormat.PHENOPACKET),
        )
    }
)


def resolve_operation(input_kind: InputFormat, output_kind: OutputFormat) -> str:
    """Look up the operation for a format pair.

    Raises
    ------
    UnsupportedConversionError
        If the pair is not in :data:`CONVERSIONS`.
    """
    try:
        return CONVERSIONS[(input_kind, output_kind)]
    except KeyError as exc:
        supported = ", ".join(sorted(CONVERSIONS.values()))
        raise UnsupportedConversionError(
            f"No such conversion: {input_kind} -> {output_kind}. "
            f"Supported conversions: {supported}"
        ) from exc


def dispatch(
    request: ConversionRequest,
    *,
    engine_factory: EngineFactory,
    writer: OutputWriter,
) -> ConversionResult:
    """Run the conversion described by ``request`` and write its result.

    Parameters
    ----------
    request : ConversionRequest
        Validated request.
    engine_factory : EngineFactory
        Provider of the engine performing the transformation.
    writer : OutputWriter
        Collaborator persisting the returned document.

    Returns
    -------
    ConversionResult
        Written path and the operation that produced it.

    Raises
    ------
    UnsupportedConversionError
        If the pair or the engine method does not exist.
    ConversionError
        If the engine fails; nothing is written in that case.
    """
    operation = resolve_operation(request.input_kind, request.output_kind)
    declared = declared_operations(engine_factory)
    if declared is not None and operation not in declared:
        raise UnsupportedConversionError(
            f"Engine '{engine_factory.name}' does not support '{operation}'; "
            f"it provides: {', '.join(sorted(declared))}."
        )
    config = EngineConfig(
        input_path=request.input_path,
        dictionary_path=request.dictionary_path,
        options=request.options,
    )
    try:
        engine = engine_factory.create(config)
    except PhenoConvertError:
        raise
    except Exception as exc:
        raise EngineError(
            f"Engine '{engine_factory.name}' could not be created: {exc}"
        ) from exc

    method = getattr(engine, operation, None)
    if not callable(method):
        raise UnsupportedConversionError(
            f"Engine '{engine_factory.name}' does not implement '{operation}'."
        )

    logger.info("Running %s on %s", operation, request.input_path)
    try:
        document = method()
    except PhenoConvertError:
        raise
    except Exception as exc:
        raise ConversionError(f"{operation} failed: {exc}") from exc

    output_path = writer.write(request.output_path, document)
    logger.info("Wrote %s output to %s", request.output_kind, output_path)
    return ConversionResult(
        output_path=output_path,
        operation=operation,
        input_kind=request.input_kind,
        output_kind=request.output_kind,
        source_path=request.input_path,
    )
