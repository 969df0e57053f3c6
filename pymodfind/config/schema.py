"""Configuration schema definitions using Pydantic for validation.

Configuration errors are caught when the file is loaded, before any
interpreter is launched.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class LocatorConfig(BaseModel):
    """Settings controlling how Python modules are located.

    Attributes:
        python_executable: Interpreter used for introspection.
        module_dirs: Directories searched first for every module.
            Relative entries are kept but never match.
        pythonpath: Search path used instead of the PYTHONPATH environment
            variable.
        use_pythonpath: Whether to scan the PYTHONPATH search path.
        use_default_path: Whether default locations may be consulted at all.
            Disabling it also disables ``use_pythonpath``.
        module_paths: Per-module directory overrides (module name -> dir).
        cache_file: JSON file persisting results across runs.
        required: Fail when any requested module is missing.
        timeout: Timeout in seconds for each interpreter invocation.
    """

    python_executable: Optional[str] = None
    module_dirs: List[str] = Field(default_factory=list)
    pythonpath: Optional[str] = None
    use_pythonpath: bool = True
    use_default_path: bool = True
    module_paths: Dict[str, str] = Field(default_factory=dict)
    cache_file: Optional[str] = None
    required: bool = False
    timeout: Optional[float] = Field(default=None, gt=0)

    model_config = {"extra": "forbid"}

    @field_validator("module_paths")
    @classmethod
    def validate_module_paths(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Reject overrides without a module name."""
        for name in v:
            if not name or not name.strip():
                raise ValueError("module_paths keys must be non-empty module names")
        return v

    @field_validator("python_executable", "pythonpath", "cache_file")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def scan_pythonpath(self) -> bool:
        return self.use_pythonpath and self.use_default_path

    @classmethod
    def default(cls) -> "LocatorConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocatorConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
