from __future__ import annotations

import json
from pathlib import Path

from clipmerge.repository import (
    SESSION_SCHEMA_VERSION,
    Repository,
    SessionSnapshot,
    SessionStore,
    canonical_path,
)


def test_save_then_load_keeps_order_and_disabled_paths(tmp_path: Path) -> None:
    repository = Repository()
    repository.add(tmp_path / "B.java", "class B {}")
    repository.add(tmp_path / "A.java", "class A {}")
    repository.set_enabled(tmp_path / "A.java", False)
    store = SessionStore(tmp_path / ".clipmerge")

    store.save(repository)

    assert store.load() == SessionSnapshot(
        paths=(canonical_path(tmp_path / "B.java"), canonical_path(tmp_path / "A.java")),
        disabled=(canonical_path(tmp_path / "A.java"),),
    )
    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload["schema_version"] == SESSION_SCHEMA_VERSION
    assert not store.path.with_suffix(".json.tmp").exists()


def test_missing_or_corrupt_session_loads_empty(tmp_path: Path) -> None:
    store = SessionStore(tmp_path)
    empty = SessionSnapshot(paths=(), disabled=())

    assert store.load() == empty

    store.path.write_text("{broken", encoding="utf-8")
    assert store.load() == empty

    store.path.write_text(json.dumps({"schema_version": 99, "paths": ["x"]}), encoding="utf-8")
    assert store.load() == empty


def test_non_string_paths_are_dropped(tmp_path: Path) -> None:
    store = SessionStore(tmp_path)
    store.path.write_text(
        json.dumps({"schema_version": SESSION_SCHEMA_VERSION, "paths": ["/a", 3], "disabled": 1}),
        encoding="utf-8",
    )

    assert store.load() == SessionSnapshot(paths=("/a",), disabled=())


def test_clear_removes_file_and_tolerates_absence(tmp_path: Path) -> None:
    store = SessionStore(tmp_path)
    store.save(Repository())

    store.clear()
    store.clear()

    assert not store.path.exists()
