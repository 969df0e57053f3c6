"""Filesystem checks deciding whether a directory holds a module."""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger("pymodfind.locator.checks")

SOURCE_SUFFIX = ".py"
PACKAGE_MARKER = "__init__.py"

_MODULE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def is_valid_module_name(name: str) -> bool:
    """Return True for dotted identifiers such as ``os`` or ``xml.etree``."""
    return bool(_MODULE_NAME_RE.fullmatch(name or ""))


def contains_module(directory: str, name: str) -> bool:
    """Return True if ``directory`` holds ``<name>.py`` or ``<name>/__init__.py``.

    Non-absolute directories never match. Candidates that cannot be
    inspected (name too long, permission denied) do not match either.
    """
    base = Path(directory)
    if not directory or not base.is_absolute():
        return False
    try:
        if (base / f"{name}{SOURCE_SUFFIX}").is_file():
            return True
        package_dir = base / name
        return package_dir.is_dir() and (package_dir / PACKAGE_MARKER).is_file()
    except OSError as e:
        logger.debug("Cannot inspect %s for %s: %s", directory, name, e)
        return False


def first_containing(directories: Iterable[str], name: str) -> Optional[str]:
    """Return the first candidate directory holding module ``name``."""
    for directory in directories:
        if not directory or not Path(directory).is_absolute():
            logger.debug("Skipping non-absolute search entry %r", directory)
            continue
        if contains_module(directory, name):
            return directory
    return None
