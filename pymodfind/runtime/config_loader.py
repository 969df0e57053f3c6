"""Helpers for loading locator configuration from TOML/JSON sources.

This module provides a single entry point `load_locator_config`
that accepts various configuration sources:

* None -> default LocatorConfig
* dict -> LocatorConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

A TOML file may either hold the settings at top level or under a
``[pymodfind]`` table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from pydantic import ValidationError

from pymodfind.config import LocatorConfig
from pymodfind.locator.errors import ConfigurationError

logger = logging.getLogger("pymodfind.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

_SECTION = "pymodfind"


def _parse_toml(text: str) -> Dict[str, Any]:
    """Parse TOML text into a dict.

    Uses stdlib tomllib on Python 3.11+ and `tomli` on older interpreters.
    """
    try:
        import tomllib  # type: ignore[attr-defined]
    except ImportError:  # pragma: no cover - Python <3.11 path
        import tomli as tomllib  # type: ignore[import-not-found,no-redef]
    return tomllib.loads(text)


def _build(data: Dict[str, Any]) -> LocatorConfig:
    section = data.get(_SECTION)
    if isinstance(section, dict):
        data = section
    try:
        return LocatorConfig.from_dict(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_locator_config(source: ConfigSource) -> LocatorConfig:
    """Load LocatorConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns LocatorConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        LocatorConfig instance.

    Raises:
        ConfigurationError: If the source cannot be parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default LocatorConfig")
        return LocatorConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading LocatorConfig from provided dict")
        return _build(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if path.is_file():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                stripped = text.lstrip()
                fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            stripped = text.lstrip()
            fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            if fmt == "json":
                data = json.loads(text)
            else:
                data = _parse_toml(text)
        except ValueError as e:
            # JSONDecodeError and TOMLDecodeError both derive from ValueError
            raise ConfigurationError(f"Cannot parse {fmt} configuration: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("Top-level configuration must be a mapping/dict")

        return _build(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["load_locator_config"]
