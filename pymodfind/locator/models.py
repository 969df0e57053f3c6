"""Data model for module queries and their results."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence


class ResolutionSource(Enum):
    """Strategy that produced a module result."""

    CACHE = "cache"
    EXPLICIT = "explicit"
    INTERPRETER = "interpreter"
    ENVIRONMENT = "environment"

    def __str__(self) -> str:
        return self.value


@dataclass
class ModuleQuery:
    """A request to locate one Python module.

    Attributes:
        name: Module name, must be non-empty.
        explicit_paths: Directories searched first, in order. Entries that
            are not absolute are ignored.
        interpreter_path: Interpreter used for out-of-process introspection.
        use_environment_path: Whether to scan the PYTHONPATH search path.
        use_default_path: Whether default locations may be consulted at all.
            When false, ``use_environment_path`` is forced false.
    """

    name: str
    explicit_paths: Sequence[str] = field(default_factory=list)
    interpreter_path: Optional[str] = None
    use_environment_path: bool = True
    use_default_path: bool = True

    def __post_init__(self) -> None:
        self.explicit_paths = [os.fspath(p) for p in self.explicit_paths]
        if not self.use_default_path:
            self.use_environment_path = False


@dataclass
class ModuleResult:
    """Outcome of locating a single module."""

    name: str
    found: bool
    directory: Optional[str] = None
    source: Optional[ResolutionSource] = None

    @classmethod
    def not_found(cls, name: str) -> "ModuleResult":
        return cls(name=name, found=False)

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "found": self.found,
            "directory": self.directory,
            "source": str(self.source) if self.source else None,
        }


@dataclass
class AggregateResult:
    """Results of locating several modules together.

    Attributes:
        all_found: True iff every located module was found.
        per_module: Result of each module, keyed by its own name.
        combined_search_path: Directories of the found modules, without
            duplicates, in order of first discovery.
        missing: Names of modules that were not found, in request order.
        hint: Remediation hint, empty when nothing is missing.
    """

    all_found: bool = True
    per_module: Dict[str, ModuleResult] = field(default_factory=dict)
    combined_search_path: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    hint: str = ""

    @property
    def pythonpath(self) -> str:
        """Combined search path joined with the platform path separator."""
        return os.pathsep.join(self.combined_search_path)

    def to_dict(self) -> Dict[str, object]:
        return {
            "all_found": self.all_found,
            "modules": {
                name: result.to_dict() for name, result in self.per_module.items()
            },
            "search_path": list(self.combined_search_path),
            "missing": list(self.missing),
            "hint": self.hint,
        }


__all__ = ["AggregateResult", "ModuleQuery", "ModuleResult", "ResolutionSource"]
