"""Exception hierarchy shared by the request, dispatch and CLI layers."""

from __future__ import annotations


class PhenoConvertError(RuntimeError):
    """Base error for a failed conversion run.

    Every subclass is fatal to the invocation; ``exit_code`` is the process
    status reported by the CLI.
    """

    exit_code: int = 1


class UsageError(PhenoConvertError):
    """Raised when input/output selectors are missing or ambiguous."""


class RequestValidationError(PhenoConvertError):
    """Raised when a well-formed request is semantically invalid."""


class ConversionError(PhenoConvertError):
    """Raised when the conversion engine cannot produce a document."""


class UnsupportedConversionError(ConversionError):
    """Raised when no operation exists for an input/output pair."""


class EngineError(PhenoConvertError):
    """Raised when a conversion engine cannot be resolved or loaded."""


class OutputWriteError(PhenoConvertError):
    """Raised when the converted document cannot be written."""
