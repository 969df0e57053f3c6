"""Configuration schema and validation for pymodfind."""

from .schema import LocatorConfig

__all__ = ["LocatorConfig"]
