"""pymodfind - locate installed Python modules for build configuration."""

from pymodfind.locator import (
    AggregateResult,
    Locator,
    MissingModulesError,
    ModuleQuery,
    ModuleResult,
    locate_all,
)

__version__ = "0.1.0"

__all__ = [
    "AggregateResult",
    "Locator",
    "MissingModulesError",
    "ModuleQuery",
    "ModuleResult",
    "__version__",
    "locate_all",
]
