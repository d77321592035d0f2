"""Factory protocol implemented by conversion engine providers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pheno_convert.application.options import EngineConfig
from pheno_convert.application.ports import ConversionEngine


@runtime_checkable
class EngineFactory(Protocol):
    """Protocol implemented by engine providers.

    A factory may also carry an ``operations`` attribute listing the
    operation names its engines implement (``phenopacket2beacon``, ...).
    Without it the engine is assumed to attempt every operation, and a
    missing method is only detected at dispatch time.
    """

    name: str

    def create(self, config: EngineConfig) -> ConversionEngine:
        """Construct an engine bound to one conversion job.

        Parameters
        ----------
        config : EngineConfig
            Input path, optional REDCap dictionary and forwarded options.

        Returns
        -------
        ConversionEngine
            Engine exposing one method per supported operation.
        """


def declared_operations(factory: EngineFactory) -> frozenset[str] | None:
    """Return the operations a factory declares, or ``None`` if undeclared."""
    operations = getattr(factory, "operations", None)
    if operations is None:
        return None
    if isinstance(operations, str):
        return frozenset({operations})
    return frozenset(operations)
