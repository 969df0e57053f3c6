"""Interpreter introspection state machine tests."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

from pymodfind.locator import Locator, ModuleQuery, ResolutionSource
from pymodfind.locator import interpreter as interp
from pymodfind.locator.errors import IntrospectionError
from pymodfind.locator.interpreter import (
    InterpreterProbe,
    containing_directory,
    environ_cleared,
    is_missing_site,
)

PYTHON = "/opt/python/bin/python"


class _FakeRun:
    """Replay scripted results and record each invocation."""

    def __init__(self, outcomes: List[object]) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[dict] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(
            {"cmd": list(cmd), "home": os.environ.get("PYTHONHOME"), "kwargs": kwargs}
        )
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        returncode, stdout, stderr = outcome
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


def _install(monkeypatch: pytest.MonkeyPatch, outcomes: List[object]) -> _FakeRun:
    fake = _FakeRun(outcomes)
    monkeypatch.setattr(interp.subprocess, "run", fake)
    return fake


def test_containing_directory_strips_package_marker_and_package() -> None:
    assert (
        containing_directory("/usr/lib/pyX/sitepkgs/foo/__init__.py")
        == "/usr/lib/pyX/sitepkgs"
    )


def test_containing_directory_strips_module_file() -> None:
    assert containing_directory("/usr/lib/pyX/sitepkgs/bar.py") == "/usr/lib/pyX/sitepkgs"


def test_containing_directory_only_matches_exact_marker_name() -> None:
    assert containing_directory("/lib/pkgs/my__init__.py") == "/lib/pkgs"


def test_is_missing_site_matches_both_spellings() -> None:
    assert is_missing_site("ImportError: No module named site\n")
    assert is_missing_site("ModuleNotFoundError: No module named 'site'\n")
    assert not is_missing_site("ModuleNotFoundError: No module named 'sitecustom'\n")
    assert not is_missing_site("")


def test_isolated_attempt_succeeds_first(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _install(monkeypatch, [(0, "/usr/lib/pyX/sitepkgs/foo/__init__.py\n", "")])

    directory = InterpreterProbe(PYTHON).module_directory("foo")

    assert directory == "/usr/lib/pyX/sitepkgs"
    assert len(fake.calls) == 1
    assert fake.calls[0]["cmd"] == [PYTHON, "-E", "-c", "import foo; print(foo.__file__)"]


def test_falls_back_to_plain_invocation(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _install(
        monkeypatch,
        [(1, "", "ImportError: boom"), (0, "/usr/lib/pyX/sitepkgs/bar.py\n", "")],
    )

    directory = InterpreterProbe(PYTHON).module_directory("bar")

    assert directory == "/usr/lib/pyX/sitepkgs"
    assert [c["cmd"][1] for c in fake.calls] == ["-E", "-c"]


def test_plain_failure_without_site_error_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYTHONHOME", "/bogus/home")
    fake = _install(
        monkeypatch,
        [(1, "", "No module named 'foo'"), (1, "", "No module named 'foo'")],
    )

    with pytest.raises(IntrospectionError) as excinfo:
        InterpreterProbe(PYTHON).module_file("foo")

    assert len(fake.calls) == 2
    assert excinfo.value.module == "foo"
    assert "No module named 'foo'" in excinfo.value.stderr


def test_missing_site_without_home_does_not_retry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PYTHONHOME", raising=False)
    fake = _install(
        monkeypatch,
        [(1, "", "No module named 'site'"), (1, "", "No module named 'site'")],
    )

    with pytest.raises(IntrospectionError):
        InterpreterProbe(PYTHON).module_file("foo")

    assert len(fake.calls) == 2


def test_missing_site_retries_with_home_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYTHONHOME", "/bogus/home")
    fake = _install(
        monkeypatch,
        [
            (1, "", "ImportError: No module named site"),
            (1, "", "ImportError: No module named site"),
            (0, "/usr/lib/pyX/sitepkgs/foo.py\n", ""),
        ],
    )

    directory = InterpreterProbe(PYTHON).module_directory("foo")

    assert directory == "/usr/lib/pyX/sitepkgs"
    assert [c["home"] for c in fake.calls] == ["/bogus/home", "/bogus/home", None]
    assert os.environ["PYTHONHOME"] == "/bogus/home"


def test_home_restored_when_cleared_retry_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYTHONHOME", "/bogus/home")
    _install(
        monkeypatch,
        [
            (1, "", "No module named 'site'"),
            (1, "", "No module named 'site'"),
            (1, "", "No module named 'foo'"),
        ],
    )

    with pytest.raises(IntrospectionError):
        InterpreterProbe(PYTHON).module_file("foo")

    assert os.environ["PYTHONHOME"] == "/bogus/home"


def test_home_restored_when_cleared_retry_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYTHONHOME", "/bogus/home")
    _install(
        monkeypatch,
        [
            (1, "", "No module named 'site'"),
            (1, "", "No module named 'site'"),
            KeyboardInterrupt(),
        ],
    )

    with pytest.raises(KeyboardInterrupt):
        InterpreterProbe(PYTHON).module_file("foo")

    assert os.environ["PYTHONHOME"] == "/bogus/home"


def test_unlaunchable_interpreter_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _install(monkeypatch, [FileNotFoundError(PYTHON), FileNotFoundError(PYTHON)])

    with pytest.raises(IntrospectionError):
        InterpreterProbe(PYTHON).module_file("foo")

    assert len(fake.calls) == 2


def test_timeout_counts_as_failed_attempt(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _install(
        monkeypatch,
        [subprocess.TimeoutExpired(PYTHON, 5), (0, "/srv/lib/foo.py\n", "")],
    )

    assert InterpreterProbe(PYTHON, timeout=5).module_directory("foo") == "/srv/lib"
    assert fake.calls[0]["kwargs"]["timeout"] == 5


def test_namespace_package_output_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, [(0, "None\n", "")])

    with pytest.raises(IntrospectionError):
        InterpreterProbe(PYTHON).module_file("nspkg")


def test_last_output_line_is_used(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, [(0, "banner printed on import\n/srv/lib/foo.py\n", "")])

    assert InterpreterProbe(PYTHON).module_file("foo") == "/srv/lib/foo.py"


def test_invalid_module_name_is_never_executed(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _install(monkeypatch, [])

    with pytest.raises(IntrospectionError):
        InterpreterProbe(PYTHON).module_file("os; import shutil")

    assert fake.calls == []


@pytest.mark.parametrize("initial", [None, "", "/some/home"])
def test_environ_cleared_restores_previous_state(
    monkeypatch: pytest.MonkeyPatch, initial: Optional[str]
) -> None:
    if initial is None:
        monkeypatch.delenv("PYTHONHOME", raising=False)
    else:
        monkeypatch.setenv("PYTHONHOME", initial)

    with environ_cleared("PYTHONHOME"):
        assert "PYTHONHOME" not in os.environ

    assert os.environ.get("PYTHONHOME") == initial


def test_running_interpreter_reports_stdlib_package() -> None:
    expected = os.path.dirname(os.path.dirname(json.__file__))

    directory = InterpreterProbe(sys.executable, timeout=60).module_directory("json")

    assert os.path.realpath(directory) == os.path.realpath(expected)


def test_running_interpreter_with_locator(tmp_path: Path) -> None:
    result = Locator().locate(
        ModuleQuery(
            "json",
            explicit_paths=[str(tmp_path)],
            interpreter_path=sys.executable,
            use_environment_path=False,
        )
    )

    assert result.found
    assert result.source is ResolutionSource.INTERPRETER
    assert os.path.isfile(os.path.join(result.directory, "json", "__init__.py"))
