"""Engine registry: named factories plus discovery from user modules.

An engine module makes factories available through one of three
attributes, checked in this order:

* ``register_engines(registry)``: a hook receiving the registry;
* ``ENGINES``: an iterable of factories;
* ``ENGINE``: a single factory.

Modules are given either as an import path (``my_pkg.engines``) or as a
path to a ``.py`` file.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from pheno_convert.application.dispatch import CONVERSIONS
from pheno_convert.engines.base import EngineFactory, declared_operations
from pheno_convert.engines.builtin import BuiltinEngineFactory
from pheno_convert.errors import EngineError

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "builtin"


class EngineRegistry:
    """Named conversion engine factories."""

    def __init__(self) -> None:
        self._factories: dict[str, EngineFactory] = {}

    def register(self, factory: object) -> None:
        """Add ``factory`` under its ``name``.

        Raises
        ------
        EngineError
            If ``factory`` lacks ``name``/``create``, its name is blank or
            already taken, or it declares operations outside the
            supported conversions.
        """
        if not isinstance(factory, EngineFactory) or not isinstance(
            factory.name, str
        ):
            raise EngineError(
                f"{factory!r} is not an engine factory: expected a 'name' "
                "string and a create(config) method."
            )
        name = factory.name.strip()
        if not name:
            raise EngineError("Engine factory name must not be blank.")
        if name in self._factories:
            raise EngineError(f"Engine '{name}' is already registered.")

        operations = declared_operations(factory)
        if operations is not None:
            unknown = operations - set(CONVERSIONS.values())
            if unknown:
                raise EngineError(
                    f"Engine '{name}' declares unsupported operations: "
                    f"{', '.join(sorted(unknown))}."
                )
        self._factories[name] = factory
        logger.debug("Registered engine '%s'", name)

    def names(self) -> list[str]:
        """Return registered engine names, sorted."""
        return sorted(self._factories)

    def get(self, name: str) -> EngineFactory:
        """Return the factory registered as ``name``.

        Raises
        ------
        EngineError
            If no engine of that name exists.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise EngineError(
                f"Unknown engine '{name}' (registered: {', '.join(self.names())})."
            )
        return factory

    def load_module(self, module_or_path: str) -> None:
        """Import an engine module and register what it exposes.

        The module's top-level code runs in this process; only load
        trusted modules.
        """
        module = _load_engine_module(module_or_path)
        hook = getattr(module, "register_engines", None)
        if callable(hook):
            hook(self)
            return
        for factory in _exposed_factories(module):
            self.register(factory)


def _load_engine_module(module_or_path: str) -> ModuleType:
    path = Path(module_or_path)
    if not path.is_file():
        try:
            return importlib.import_module(module_or_path)
        except Exception as exc:
            raise EngineError(
                f"Engine module '{module_or_path}' cannot be imported: {exc}"
            ) from exc

    spec = importlib.util.spec_from_file_location(f"_pheno_engine_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise EngineError(f"Engine file {path} is not a loadable Python module.")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise EngineError(f"Engine file {path} failed while loading: {exc}") from exc
    return module


def _exposed_factories(module: ModuleType) -> list[object]:
    engines = getattr(module, "ENGINES", None)
    if engines is not None:
        return list(engines)
    engine = getattr(module, "ENGINE", None)
    if engine is not None:
        return [engine]
    raise EngineError(
        f"Engine module '{module.__name__}' defines none of "
        "register_engines(registry), ENGINES or ENGINE."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> EngineRegistry:
    """Create a registry holding the built-in engine plus ``extra_modules``."""
    registry = EngineRegistry()
    registry.register(BuiltinEngineFactory())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
