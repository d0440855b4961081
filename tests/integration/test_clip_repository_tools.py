from __future__ import annotations

from pathlib import Path

from clipmerge.server import StdioServer, create_server


def _call(server: StdioServer, method: str, **params: object) -> dict[str, object]:
    return server.handle_payload({"id": f"req-{method}", "method": method, "params": params})


def _loaded_server(tmp_path: Path) -> StdioServer:
    for name in ("A", "B", "C"):
        (tmp_path / f"{name}.java").write_text(f"class {name} {{}}", encoding="utf-8")
    server = create_server(workspace=str(tmp_path))
    _call(server, "clip.add", paths=["A.java", "B.java", "C.java", "notes.txt"])
    return server


def test_add_reports_discovered_files_and_skips_known(tmp_path: Path) -> None:
    server = _loaded_server(tmp_path)

    response = _call(server, "clip.add", paths=["."])

    assert response["result"]["discovered"] == 3
    assert response["result"]["updated"] == []
    assert len(response["result"]["skipped"]) == 3


def test_enable_flags_drive_render_and_status(tmp_path: Path) -> None:
    server = _loaded_server(tmp_path)

    assert _call(server, "clip.set_enabled", path="B.java", enabled=False)["result"] == {
        "path": "B.java",
        "enabled": False,
    }
    assert _call(server, "clip.toggle", path="C.java")["result"]["enabled"] is False

    status = _call(server, "clip.status")["result"]
    assert status["total_count"] == 3
    assert status["enabled_count"] == 1
    rendered = _call(server, "clip.render", code_only=True)["result"]["text"]
    assert rendered == "// ===== A.java =====\nclass A {}\n\n"

    assert _call(server, "clip.enable_all")["result"] == {"enabled_count": 3}
    assert _call(server, "clip.disable_all")["result"] == {"enabled_count": 0}
    assert _call(server, "clip.render", code_only=True)["result"]["text"] == ""


def test_remove_and_copy_entry(tmp_path: Path) -> None:
    server = _loaded_server(tmp_path)

    copied = _call(server, "clip.copy_entry", path="A.java")["result"]
    assert copied["text"] == "// ===== A.java =====\nclass A {}\n"

    assert _call(server, "clip.remove", path="A.java")["result"]["removed"] is True
    again = _call(server, "clip.remove", path="A.java")
    assert again["ok"] is False
    assert again["error"]["code"] == "UNKNOWN_ENTRY"

    names = [entry["name"] for entry in _call(server, "clip.list")["result"]["entries"]]
    assert names == ["B.java", "C.java"]


def test_reset_forgets_everything(tmp_path: Path) -> None:
    server = _loaded_server(tmp_path)

    assert _call(server, "clip.reset")["result"] == {"removed": 3}
    assert _call(server, "clip.list")["result"] == {"entries": []}
    assert not (tmp_path / ".clipmerge" / "session.json").exists()


def test_audit_log_tool_returns_recent_events(tmp_path: Path) -> None:
    server = _loaded_server(tmp_path)
    _call(server, "clip.status")

    response = _call(server, "clip.audit_log", limit=2)

    entries = response["result"]["entries"]
    assert [entry["tool"] for entry in entries] == ["clip.add", "clip.status"]
    assert all("paths" not in entry["metadata"] for entry in entries)
