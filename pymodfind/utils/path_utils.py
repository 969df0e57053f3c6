"""Search-path helpers: splitting path lists and filtering candidates."""

import os
from typing import Iterable, List, Optional


def split_search_path(value: Optional[str], sep: str = os.pathsep) -> List[str]:
    """
    Split a PYTHONPATH-style string into its entries.

    Empty entries are dropped.

    Examples:
        >>> split_search_path("/opt/lib:/usr/lib", sep=":")
        ['/opt/lib', '/usr/lib']
        >>> split_search_path("::/opt/lib:", sep=":")
        ['/opt/lib']
    """
    if not value:
        return []
    return [entry for entry in value.split(sep) if entry]


def absolute_only(paths: Iterable[str]) -> List[str]:
    """Keep only absolute, non-blank entries, preserving order."""
    return [p for p in paths if p and p.strip() and os.path.isabs(p)]


def dedupe_preserving_order(paths: Iterable[str]) -> List[str]:
    """
    Remove duplicate entries, keeping the first occurrence of each.

    Examples:
        >>> dedupe_preserving_order(["/a", "/b", "/a", "/c", "/b"])
        ['/a', '/b', '/c']
    """
    seen = set()
    result = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        result.append(path)
    return result


def environment_search_path(override: Optional[str] = None) -> List[str]:
    """Return the absolute entries of the module search path.

    Args:
        override: Explicit path list to use instead of the ``PYTHONPATH``
            environment variable. ``None`` means "use the environment".
    """
    value = override if override is not None else os.environ.get("PYTHONPATH", "")
    return absolute_only(split_search_path(value))
