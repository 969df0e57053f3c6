"""Locate several modules and combine their results."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from pymodfind.locator.errors import ConfigurationError, MissingModulesError
from pymodfind.locator.locator import Locator
from pymodfind.locator.models import AggregateResult, ModuleQuery
from pymodfind.utils.path_utils import dedupe_preserving_order

logger = logging.getLogger("pymodfind.locator.aggregate")


def remediation_hint(interpreter_path: Optional[str]) -> str:
    """Describe which inputs help finding missing modules."""
    if interpreter_path:
        hint = f'Check if executing {interpreter_path} -c "import <module>" works'
    else:
        hint = "Set the Python interpreter, e.g., by searching for it first"
    return (
        f"{hint} or set the PYTHONPATH environment/config variable"
        " or set the module directories or per-module path override(s)."
    )


def locate_all(
    locator: Locator,
    names: Iterable[str],
    *,
    explicit_paths: Sequence[str] = (),
    interpreter_path: Optional[str] = None,
    use_environment_path: bool = True,
    use_default_path: bool = True,
    required: bool = False,
    search_path: Sequence[str] = (),
) -> AggregateResult:
    """Locate every module in ``names``.

    Every module is attempted before any failure is reported.

    Args:
        locator: Locator performing the individual lookups.
        names: Module names, in request order.
        explicit_paths: Directories searched first for every module.
        interpreter_path: Interpreter used for introspection.
        use_environment_path: Whether to scan PYTHONPATH.
        use_default_path: Whether default locations may be used at all.
        required: Raise when any module is missing.
        search_path: Previously combined search path to extend.

    Returns:
        AggregateResult: Per-module results and the combined search path.

    Raises:
        ConfigurationError: If no module names were given.
        MissingModulesError: If ``required`` and any module is missing.
    """
    names = list(names)
    if not names:
        raise ConfigurationError("No Python module names specified")

    aggregate = AggregateResult()
    found_dirs: List[str] = list(search_path)

    for name in names:
        query = ModuleQuery(
            name=name,
            explicit_paths=explicit_paths,
            interpreter_path=interpreter_path,
            use_environment_path=use_environment_path,
            use_default_path=use_default_path,
        )
        try:
            result = locator.locate(query)
        except ConfigurationError as e:
            logger.error("%s (skipped)", e)
            continue

        aggregate.per_module[result.name] = result
        if result.found and result.directory:
            found_dirs.append(result.directory)
        else:
            aggregate.all_found = False
            if result.name not in aggregate.missing:
                aggregate.missing.append(result.name)

    aggregate.combined_search_path = dedupe_preserving_order(found_dirs)

    if aggregate.missing:
        aggregate.hint = remediation_hint(interpreter_path)
        logger.info("Missing Python modules: %s", ", ".join(aggregate.missing))
        if required:
            raise MissingModulesError(aggregate.missing, aggregate.hint, aggregate)

    return aggregate


__all__ = ["locate_all", "remediation_hint"]
