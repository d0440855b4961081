from __future__ import annotations

import json
from pathlib import Path

from clipmerge.config import CliOverrides
from clipmerge.server import create_server


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_loaded_files_and_flags_survive_restart(tmp_path: Path) -> None:
    a = _write(tmp_path / "src" / "A.java", "class A {}")
    b = _write(tmp_path / "src" / "B.java", "class B {}")
    first = create_server(workspace=str(tmp_path))
    first.handle_payload({"id": "1", "method": "clip.add", "params": {"paths": ["src"]}})
    first.handle_payload(
        {"id": "2", "method": "clip.set_enabled", "params": {"path": str(b), "enabled": False}}
    )
    first.close()

    second = create_server(workspace=str(tmp_path))
    warnings = second.restore_session()

    assert warnings == []
    listed = second.handle_payload({"id": "3", "method": "clip.list", "params": {}})
    entries = listed["result"]["entries"]
    assert [(entry["path"], entry["enabled"]) for entry in entries] == [
        (str(a.resolve()), True),
        (str(b.resolve()), False),
    ]


def test_unreadable_session_files_become_warnings(tmp_path: Path) -> None:
    a = _write(tmp_path / "A.java", "class A {}")
    first = create_server(workspace=str(tmp_path))
    first.handle_payload({"id": "1", "method": "clip.add", "params": {"paths": [str(a)]}})
    a.unlink()

    second = create_server(workspace=str(tmp_path))

    assert second.restore_session() == [f"Session file missing: {a.resolve()}"]
    listed = second.handle_payload({"id": "2", "method": "clip.list", "params": {}})
    assert listed["result"]["entries"] == []


def test_persistence_can_be_turned_off(tmp_path: Path) -> None:
    a = _write(tmp_path / "A.java", "class A {}")
    server = create_server(
        workspace=str(tmp_path),
        cli_overrides=CliOverrides(persist_session=False),
    )
    server.handle_payload({"id": "1", "method": "clip.add", "params": {"paths": [str(a)]}})

    session_path = tmp_path / ".clipmerge" / "session.json"
    assert not session_path.exists()
    assert server.restore_session() == []


def test_session_file_lists_paths_in_insertion_order(tmp_path: Path) -> None:
    b = _write(tmp_path / "B.java", "class B {}")
    a = _write(tmp_path / "A.java", "class A {}")
    server = create_server(workspace=str(tmp_path))
    server.handle_payload(
        {"id": "1", "method": "clip.add", "params": {"paths": [str(b), str(a)]}}
    )

    payload = json.loads((tmp_path / ".clipmerge" / "session.json").read_text(encoding="utf-8"))

    assert payload["paths"] == [str(b.resolve()), str(a.resolve())]
    assert payload["disabled"] == []
