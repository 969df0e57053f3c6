"""ResultStore value semantics and persistence tests."""

from __future__ import annotations

import json
from pathlib import Path

from pymodfind.locator.cache import (
    ResultStore,
    is_blank,
    is_found,
    is_notfound,
    notfound_value,
)


def test_value_classification() -> None:
    assert is_blank(None)
    assert is_blank("   ")
    assert is_notfound("foo-NOTFOUND")
    assert is_notfound(notfound_value("bar"))
    assert not is_notfound("/usr/lib")
    assert is_found("/usr/lib")
    assert not is_found("foo-NOTFOUND")
    assert not is_found("")


def test_needs_lookup_only_for_blank_entries() -> None:
    store = ResultStore({"a": "", "b": "b-NOTFOUND", "c": "/dir"})

    assert store.needs_lookup("a")
    assert not store.needs_lookup("b")
    assert not store.needs_lookup("c")
    assert store.needs_lookup("unknown")


def test_clear_blanks_entries() -> None:
    store = ResultStore({"a": "/x", "b": "b-NOTFOUND"})

    assert store.clear(["b", "missing"]) == 1
    assert store.get("b") == ""
    assert store.get("a") == "/x"

    assert store.clear() == 2
    assert store.needs_lookup("a")


def test_save_and_reload(tmp_path: Path) -> None:
    path = tmp_path / "cache" / "results.json"
    store = ResultStore(path=path)
    store.set_found("alpha", "/site")
    store.set_notfound("beta")

    store.save()
    reloaded = ResultStore(path=path)

    assert reloaded.get("alpha") == "/site"
    assert reloaded.get("beta") == "beta-NOTFOUND"
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == 1


def test_overrides_win_over_persisted_entries(tmp_path: Path) -> None:
    path = tmp_path / "results.json"
    path.write_text(
        json.dumps({"version": 1, "entries": {"alpha": "alpha-NOTFOUND"}}),
        encoding="utf-8",
    )

    store = ResultStore(entries={"alpha": "/forced"}, path=path)

    assert store.get("alpha") == "/forced"


def test_malformed_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "results.json"
    path.write_text("{not json", encoding="utf-8")

    store = ResultStore(path=path)

    assert len(store) == 0


def test_save_without_path_is_noop() -> None:
    assert ResultStore({"a": "/x"}).save() is None
