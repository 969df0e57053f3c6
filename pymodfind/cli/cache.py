"""Cache command implementation: inspect or reset stored results."""

import logging
from typing import Optional

from rich.console import Console

from pymodfind.locator import ResultStore
from pymodfind.runtime.display import render_store

logger = logging.getLogger("pymodfind.cli.cache")


def cache_command(args, console: Optional[Console] = None) -> int:
    """Execute cache command.

    ``show`` lists stored entries. ``clear`` blanks the named entries (all
    entries when no module is named) so that they are looked up again.

    Returns:
        int: Exit code.
    """
    cache_file = args.cache_file
    store = ResultStore(path=cache_file)

    if args.action == "show":
        render_store(store, console or Console())
        return 0

    if args.action == "clear":
        names = args.modules or None
        count = store.clear(names)
        try:
            store.save()
        except OSError as e:
            logger.error("Failed to write cache file %s: %s", cache_file, e)
            return 1
        logger.info("Cleared %d cache entr%s", count, "y" if count == 1 else "ies")
        return 0

    logger.error("Unknown cache action: %s", args.action)
    return 1
