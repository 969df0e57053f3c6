"""Result store remembering where modules were found.

Each entry is a plain string, like a build-system cache variable:

* blank (or absent): unknown, the module is looked up again;
* ending in ``NOTFOUND``: a previous lookup failed, the entry is kept;
* anything else: the directory containing the module.

The store can be persisted to a JSON file so that results survive across
runs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

logger = logging.getLogger("pymodfind.locator.cache")

NOTFOUND_SUFFIX = "NOTFOUND"
DEFAULT_CACHE_FILE = ".pymodfind_cache.json"
_FORMAT_VERSION = 1


def notfound_value(name: str) -> str:
    return f"{name}-{NOTFOUND_SUFFIX}"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_notfound(value: Optional[str]) -> bool:
    return value is not None and value.rstrip().endswith(NOTFOUND_SUFFIX)


def is_found(value: Optional[str]) -> bool:
    """True if ``value`` names a directory rather than blank/NOTFOUND."""
    return not is_blank(value) and not is_notfound(value)


class ResultStore:
    """Memoization map from module name to stored lookup value.

    Args:
        entries: Initial entries, e.g. per-module path overrides.
        path: Optional JSON file the store is loaded from and saved to.
    """

    def __init__(
        self,
        entries: Optional[Mapping[str, str]] = None,
        path: Optional[Union[str, Path]] = None,
    ) -> None:
        self.path = Path(path) if path else None
        self._entries: Dict[str, str] = {}
        if self.path is not None and self.path.exists():
            self._entries.update(self._read(self.path))
        if entries:
            self._entries.update(entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> Optional[str]:
        return self._entries.get(name)

    def needs_lookup(self, name: str) -> bool:
        """Return True unless a non-blank value is already stored."""
        return is_blank(self._entries.get(name))

    def set(self, name: str, value: str) -> None:
        self._entries[name] = value

    def set_found(self, name: str, directory: str) -> None:
        self._entries[name] = directory

    def set_notfound(self, name: str) -> None:
        self._entries[name] = notfound_value(name)

    def clear(self, names: Optional[Iterable[str]] = None) -> int:
        """Blank the given entries (all when ``names`` is None).

        Returns:
            int: Number of entries that were blanked.
        """
        targets = list(self._entries) if names is None else list(names)
        count = 0
        for name in targets:
            if name in self._entries:
                self._entries[name] = ""
                count += 1
        return count

    def items(self):
        return sorted(self._entries.items())

    def save(self, path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Write the store to ``path`` (or the path it was created with)."""
        target = Path(path) if path else self.path
        if target is None:
            return None
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": _FORMAT_VERSION, "entries": dict(sorted(self._entries.items()))}
        target.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved %d cache entries to %s", len(self._entries), target)
        return target

    @staticmethod
    def _read(path: Path) -> Dict[str, str]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", path, e)
            return {}
        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            logger.warning("Ignoring malformed cache file %s", path)
            return {}
        return {str(k): str(v) for k, v in entries.items()}


__all__ = [
    "DEFAULT_CACHE_FILE",
    "NOTFOUND_SUFFIX",
    "ResultStore",
    "is_blank",
    "is_found",
    "is_notfound",
    "notfound_value",
]
