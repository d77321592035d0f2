"""Conversion engine contracts, registry and built-in engine."""

from pheno_convert.engines.base import EngineFactory

__all__ = ["EngineFactory"]
