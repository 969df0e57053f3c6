"""Find command implementation."""

import logging
import os
import shutil
from typing import Optional

from rich.console import Console

from pymodfind.locator import (
    ConfigurationError,
    Locator,
    MissingModulesError,
    ResultStore,
    locate_all,
)
from pymodfind.locator.cache import DEFAULT_CACHE_FILE
from pymodfind.runtime.config_loader import load_locator_config
from pymodfind.runtime.display import render_aggregate
from pymodfind.utils.path_utils import split_search_path

logger = logging.getLogger("pymodfind.cli.find")

EXIT_MISSING = 1
EXIT_CONFIG = 2


def resolve_interpreter(executable: Optional[str]) -> Optional[str]:
    """Return the absolute path of ``executable``, looking it up on PATH.

    Raises:
        ConfigurationError: If a relative name cannot be found on PATH.
    """
    if not executable:
        return None
    if os.path.isabs(executable):
        return executable
    resolved = shutil.which(executable)
    if resolved is None:
        raise ConfigurationError(f"Python interpreter not found: {executable}")
    return os.path.abspath(resolved)


def find_command(args, console: Optional[Console] = None) -> int:
    """Execute find command.

    Args:
        args: Parsed command-line arguments.
        console: Console the results are printed to.

    Returns:
        int: Exit code.
    """
    try:
        config = load_locator_config(getattr(args, "config", None))
        interpreter = resolve_interpreter(
            getattr(args, "python", None) or config.python_executable
        )
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIG

    module_dirs = list(config.module_dirs) + list(getattr(args, "path", None) or [])
    use_pythonpath = config.use_pythonpath and not getattr(args, "no_pythonpath", False)
    use_default_path = config.use_default_path and not getattr(
        args, "no_default_path", False
    )
    required = getattr(args, "required", False) or config.required
    if getattr(args, "no_cache", False):
        cache_file = None
    else:
        cache_file = (
            getattr(args, "cache_file", None) or config.cache_file or DEFAULT_CACHE_FILE
        )
    fmt = getattr(args, "format", "table")

    logger.debug("Modules: %s", ", ".join(args.modules))
    logger.debug("Interpreter: %s", interpreter)
    logger.debug("Module dirs: %s", module_dirs)
    logger.debug("Use PYTHONPATH: %s (default path: %s)", use_pythonpath, use_default_path)

    store = ResultStore(entries=config.module_paths, path=cache_file)
    locator = Locator(store=store, pythonpath=config.pythonpath, timeout=config.timeout)
    console = console or Console()

    try:
        aggregate = locate_all(
            locator,
            args.modules,
            explicit_paths=module_dirs,
            interpreter_path=interpreter,
            use_environment_path=use_pythonpath,
            use_default_path=use_default_path,
            required=required,
            search_path=split_search_path(getattr(args, "search_path", None)),
        )
    except MissingModulesError as e:
        logger.error("%s", e)
        if e.aggregate is not None:
            render_aggregate(e.aggregate, console, fmt)
        return EXIT_MISSING
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIG
    finally:
        try:
            store.save()
        except OSError as e:
            logger.warning("Failed to write cache file %s: %s", store.path, e)

    render_aggregate(aggregate, console, fmt)
    return 0
