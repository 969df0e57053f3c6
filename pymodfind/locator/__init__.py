"""Public locator API surface."""

from pymodfind.locator.aggregate import locate_all, remediation_hint
from pymodfind.locator.cache import ResultStore
from pymodfind.locator.errors import (
    ConfigurationError,
    IntrospectionError,
    LocatorError,
    MissingModulesError,
    RecoverableError,
)
from pymodfind.locator.interpreter import InterpreterProbe, IntrospectionState
from pymodfind.locator.locator import Locator
from pymodfind.locator.models import (
    AggregateResult,
    ModuleQuery,
    ModuleResult,
    ResolutionSource,
)

__all__ = [
    "AggregateResult",
    "ConfigurationError",
    "InterpreterProbe",
    "IntrospectionError",
    "IntrospectionState",
    "Locator",
    "LocatorError",
    "MissingModulesError",
    "ModuleQuery",
    "ModuleResult",
    "RecoverableError",
    "ResolutionSource",
    "ResultStore",
    "locate_all",
    "remediation_hint",
]
