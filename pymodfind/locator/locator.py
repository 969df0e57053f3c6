"""Module Locator: resolve a module name to the directory that contains it."""

from __future__ import annotations

import logging
from typing import Optional

from pymodfind.locator.cache import ResultStore, is_notfound
from pymodfind.locator.checks import first_containing, is_valid_module_name
from pymodfind.locator.errors import ConfigurationError, IntrospectionError
from pymodfind.locator.interpreter import FAILURE_HINT, InterpreterProbe
from pymodfind.locator.models import ModuleQuery, ModuleResult, ResolutionSource
from pymodfind.utils.path_utils import environment_search_path

logger = logging.getLogger("pymodfind.locator")


class Locator:
    """Locate Python modules by directory scan and interpreter introspection.

    Strategies are tried in order and the first success wins:

    1. the explicit directories of the query;
    2. the interpreter named by the query, asked to import the module;
    3. the PYTHONPATH search path, unless disabled by the query.

    Results are memoized in ``store``. A stored directory or NOTFOUND value
    is returned as is; only blank entries are looked up again.

    Args:
        store: Result store, a fresh in-memory one by default.
        pythonpath: Search path to use instead of the PYTHONPATH environment
            variable.
        timeout: Timeout in seconds for each interpreter invocation.
    """

    def __init__(
        self,
        store: Optional[ResultStore] = None,
        pythonpath: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.store = store if store is not None else ResultStore()
        self.pythonpath = pythonpath
        self.timeout = timeout

    def locate(self, query: ModuleQuery) -> ModuleResult:
        """Locate the module described by ``query``.

        Raises:
            ConfigurationError: If the module name is missing or is not a
                dotted identifier.
        """
        name = (query.name or "").strip()
        if not name:
            raise ConfigurationError("locate(): Missing module name")
        if not is_valid_module_name(name):
            raise ConfigurationError(f"locate(): Invalid module name {name!r}")

        if not self.store.needs_lookup(name):
            value = self.store.get(name) or ""
            if is_notfound(value):
                logger.debug("%s: not found in a previous run", name)
                return ModuleResult.not_found(name)
            logger.debug("%s: using stored directory %s", name, value)
            return ModuleResult(name, True, value, ResolutionSource.CACHE)

        result = self._resolve(name, query)
        if result.found and result.directory:
            self.store.set_found(name, result.directory)
        else:
            self.store.set_notfound(name)
        return result

    def _resolve(self, name: str, query: ModuleQuery) -> ModuleResult:
        directory = first_containing(query.explicit_paths, name)
        if directory:
            logger.debug("%s: found in explicit path %s", name, directory)
            return ModuleResult(name, True, directory, ResolutionSource.EXPLICIT)

        if query.interpreter_path:
            directory = self._introspect(name, query.interpreter_path)
            if directory:
                logger.debug("%s: interpreter reports %s", name, directory)
                return ModuleResult(
                    name, True, directory, ResolutionSource.INTERPRETER
                )

        if query.use_environment_path:
            directory = first_containing(
                environment_search_path(self.pythonpath), name
            )
            if directory:
                logger.debug("%s: found on PYTHONPATH in %s", name, directory)
                return ModuleResult(
                    name, True, directory, ResolutionSource.ENVIRONMENT
                )

        logger.info("Python module %s not found", name)
        return ModuleResult.not_found(name)

    def _introspect(self, name: str, interpreter: str) -> Optional[str]:
        probe = InterpreterProbe(interpreter, timeout=self.timeout)
        try:
            return probe.module_directory(name)
        except IntrospectionError as e:
            if e.stderr:
                logger.debug("%s stderr:\n%s", interpreter, e.stderr.rstrip())
            logger.warning("%s. %s", e, FAILURE_HINT)
            return None


__all__ = ["Locator"]
