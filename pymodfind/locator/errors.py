"""Exception hierarchy for module location.

Recoverable errors describe expected failure conditions: the current query
or strategy is skipped and resolution carries on. ``MissingModulesError`` is
the only fatal report and is raised once, after every requested module has
been attempted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from pymodfind.locator.models import AggregateResult


class LocatorError(Exception):
    """Base class for all pymodfind errors."""


# =============================================================================
# Recoverable errors
# =============================================================================


class RecoverableError(LocatorError):
    """Base class for errors that skip the current item and continue."""


class ConfigurationError(RecoverableError):
    """Invalid caller input, e.g. a missing module name or a bad config file."""


class IntrospectionError(RecoverableError):
    """The interpreter could not report where a module lives.

    Attributes:
        interpreter: Interpreter executable that was invoked.
        module: Module that was imported.
        stderr: Standard error of the last attempt, if any.
    """

    def __init__(
        self,
        message: str,
        interpreter: str,
        module: str,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.interpreter = interpreter
        self.module = module
        self.stderr = stderr


# =============================================================================
# Fatal errors
# =============================================================================


class MissingModulesError(LocatorError):
    """Required modules remained unresolved after all strategies ran.

    Attributes:
        missing: Names of the modules that were not found, in request order.
        hint: Remediation hint telling the caller which inputs to set.
        aggregate: The aggregate result the report was built from.
    """

    def __init__(
        self,
        missing: List[str],
        hint: str,
        aggregate: Optional["AggregateResult"] = None,
    ) -> None:
        self.missing = list(missing)
        self.hint = hint
        self.aggregate = aggregate
        super().__init__(
            "Could NOT find the following Python modules:\n"
            + "\n".join(self.missing)
            + "\n"
            + hint
        )


__all__ = [
    "ConfigurationError",
    "IntrospectionError",
    "LocatorError",
    "MissingModulesError",
    "RecoverableError",
]
