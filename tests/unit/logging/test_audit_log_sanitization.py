from __future__ import annotations

import json
from pathlib import Path

from clipmerge.logging import sanitize_arguments
from clipmerge.server import create_server

SECRET_SOURCE = 'public class Vault { String key = "top-secret"; }'


def test_pasted_source_never_reaches_the_audit_log(tmp_path: Path) -> None:
    server = create_server(workspace=str(tmp_path))
    server.handle_payload(
        {
            "id": "req-200",
            "method": "clip.paste",
            "params": {"text": SECRET_SOURCE, "responses": ["cancel"]},
        }
    )

    audit_path = tmp_path / ".clipmerge" / "audit.jsonl"
    entries = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    event = entries[-1]

    metadata = event["metadata"]
    assert metadata["text_present"] is True
    assert metadata["text_length"] == len(SECRET_SOURCE)
    assert metadata["responses_type"] == "list"
    assert metadata["responses_length"] == 1
    assert "text" not in metadata
    assert "top-secret" not in json.dumps(event, sort_keys=True)


def test_notes_are_reduced_to_presence_and_length() -> None:
    sanitized = sanitize_arguments({"notes": "call me", "code_only": False})

    assert sanitized == {"code_only": False, "notes_length": 7, "notes_present": True}


def test_paths_and_flags_pass_through() -> None:
    sanitized = sanitize_arguments({"path": "/src/A.java", "enabled": True, "limit": 5})

    assert sanitized == {"enabled": True, "limit": 5, "path": "/src/A.java"}


def test_unknown_structures_are_summarized() -> None:
    sanitized = sanitize_arguments({"custom": "token=abc", "extra": {"b": 1, "a": 2}, "obj": 1.5j})

    assert sanitized == {
        "custom_length": len("token=abc"),
        "custom_present": True,
        "extra_keys": ["a", "b"],
        "extra_type": "dict",
        "obj_type": "complex",
    }
