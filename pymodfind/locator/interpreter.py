"""Out-of-process interpreter introspection.

The interpreter is asked to import a module and print its ``__file__``.
Invocation follows a small state machine:

    TRY_ISOLATED → TRY_PLAIN → TRY_PLAIN_WITHOUT_HOME → FAILED

Any attempt exiting with status 0 moves to SUCCEEDED. A failed plain
attempt goes straight to FAILED unless the home-cleared retry applies.
``TRY_ISOLATED`` passes ``-E`` so that ``PYTHON*`` environment variables are
ignored. ``TRY_PLAIN_WITHOUT_HOME`` is only entered when the plain attempt
failed because the ``site`` module could not be imported while
``PYTHONHOME`` is set; that variable is removed for the one call and put
back afterwards on every exit path.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from contextlib import contextmanager
from enum import Enum, auto
from typing import Iterator, Optional

from pymodfind.locator.checks import PACKAGE_MARKER, is_valid_module_name
from pymodfind.locator.errors import IntrospectionError

logger = logging.getLogger("pymodfind.locator.interpreter")

ISOLATION_FLAG = "-E"
HOME_VARIABLE = "PYTHONHOME"

# Python 2 spells it "No module named site", Python 3 "No module named 'site'"
_MISSING_SITE_RE = re.compile(r"No module named '?site'?\s*$", re.MULTILINE)
_PACKAGE_MARKERS = (PACKAGE_MARKER, PACKAGE_MARKER + "c")

FAILURE_HINT = (
    "Make sure that the Python interpreter is installed properly and that the "
    "PYTHONHOME environment variable is either not set (recommended) or at "
    "least set correctly for this Python installation. Maybe you need to "
    "enable this Python version first if more than one version of Python is "
    "installed on your system? Otherwise, select the right Python interpreter "
    "executable."
)


class IntrospectionState(Enum):
    """States of the interpreter invocation fallback."""

    TRY_ISOLATED = auto()
    TRY_PLAIN = auto()
    TRY_PLAIN_WITHOUT_HOME = auto()
    SUCCEEDED = auto()
    FAILED = auto()

    @property
    def terminal(self) -> bool:
        return self in (IntrospectionState.SUCCEEDED, IntrospectionState.FAILED)


@contextmanager
def environ_cleared(name: str) -> Iterator[None]:
    """Remove environment variable ``name`` for the duration of the block.

    The previous value (or its absence) is restored on exit, including when
    the block raises.
    """
    saved = os.environ.get(name)
    os.environ.pop(name, None)
    try:
        yield
    finally:
        if saved is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = saved


def containing_directory(module_file: str) -> str:
    """Return the directory that must be on the search path for ``module_file``.

    Examples:
        >>> containing_directory("/usr/lib/py/site-packages/foo/__init__.py")
        '/usr/lib/py/site-packages'
        >>> containing_directory("/usr/lib/py/site-packages/bar.py")
        '/usr/lib/py/site-packages'
    """
    directory = os.path.dirname(module_file)
    if os.path.basename(module_file) in _PACKAGE_MARKERS:
        directory = os.path.dirname(directory)
    return directory


def import_script(module: str) -> str:
    """Return the ``-c`` program printing the location of ``module``."""
    return f"import {module}; print({module}.__file__)"


def is_missing_site(stderr: str) -> bool:
    return bool(_MISSING_SITE_RE.search(stderr or ""))


class InterpreterProbe:
    """Ask an interpreter executable where it imports modules from.

    Args:
        executable: Path of the Python interpreter.
        timeout: Optional timeout in seconds for each invocation. A timed out
            invocation counts as a failed attempt.
    """

    def __init__(self, executable: str, timeout: Optional[float] = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def _invoke(
        self, module: str, isolated: bool
    ) -> Optional[subprocess.CompletedProcess]:
        cmd = [self.executable]
        if isolated:
            cmd.append(ISOLATION_FLAG)
        cmd.extend(["-c", import_script(module)])
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("%s timed out after %ss", self.executable, self.timeout)
        except OSError as e:
            logger.debug("Failed to launch %s: %s", self.executable, e)
        return None

    def module_file(self, module: str) -> str:
        """Return the ``__file__`` reported for ``module``.

        Raises:
            IntrospectionError: If every invocation attempt failed.
        """
        if not is_valid_module_name(module):
            raise IntrospectionError(
                f"Refusing to import invalid module name {module!r}",
                self.executable,
                module,
            )

        state = IntrospectionState.TRY_ISOLATED
        completed: Optional[subprocess.CompletedProcess] = None
        while not state.terminal:
            if state is IntrospectionState.TRY_ISOLATED:
                completed = self._invoke(module, isolated=True)
                state = self._next_state(state, completed)
            elif state is IntrospectionState.TRY_PLAIN:
                completed = self._invoke(module, isolated=False)
                state = self._next_state(state, completed)
            elif state is IntrospectionState.TRY_PLAIN_WITHOUT_HOME:
                with environ_cleared(HOME_VARIABLE):
                    completed = self._invoke(module, isolated=False)
                state = self._next_state(state, completed)
            logger.debug("Introspection of %s: %s", module, state.name)

        stderr = completed.stderr if completed is not None else ""
        if state is IntrospectionState.FAILED or completed is None:
            raise IntrospectionError(
                f"Failed to run Python interpreter {self.executable} "
                f"with or without {ISOLATION_FLAG} option",
                self.executable,
                module,
                stderr=stderr,
            )

        lines = (completed.stdout or "").strip().splitlines()
        path = lines[-1].strip() if lines else ""
        if not path or not os.path.isabs(path):
            raise IntrospectionError(
                f"{self.executable} reported no file location for {module}: {path!r}",
                self.executable,
                module,
                stderr=stderr,
            )
        return path

    def module_directory(self, module: str) -> str:
        """Return the directory containing ``module``."""
        return containing_directory(self.module_file(module))

    @staticmethod
    def _next_state(
        state: IntrospectionState,
        completed: Optional[subprocess.CompletedProcess],
    ) -> IntrospectionState:
        if completed is not None and completed.returncode == 0:
            return IntrospectionState.SUCCEEDED
        if state is IntrospectionState.TRY_ISOLATED:
            return IntrospectionState.TRY_PLAIN
        if (
            state is IntrospectionState.TRY_PLAIN
            and completed is not None
            and HOME_VARIABLE in os.environ
            and is_missing_site(completed.stderr)
        ):
            return IntrospectionState.TRY_PLAIN_WITHOUT_HOME
        return IntrospectionState.FAILED


__all__ = [
    "FAILURE_HINT",
    "IntrospectionState",
    "InterpreterProbe",
    "containing_directory",
    "environ_cleared",
    "import_script",
    "is_missing_site",
]
