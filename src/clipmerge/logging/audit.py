"""Per-request JSONL audit trail."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

# Argument keys whose values are safe to log verbatim.
_VERBATIM_KEYS = frozenset({"path", "enabled", "code_only", "since", "limit"})


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """One tool call as written to ``audit.jsonl``."""

    timestamp: str
    request_id: str
    tool: str
    ok: bool
    blocked: bool
    error_code: str | None
    metadata: dict[str, object]

    def to_json(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Describe tool arguments without recording pasted source or notes.

    Strings are reduced to presence and length unless the key is known to be
    harmless; containers are reduced to their type and size.
    """
    sanitized: dict[str, object] = {}
    for key in sorted(arguments):
        sanitized.update(_describe(key, arguments[key]))
    return sanitized


def _describe(key: str, value: object) -> dict[str, object]:
    if value is None or isinstance(value, (bool, int, float)):
        return {key: value}
    if isinstance(value, str):
        if key in _VERBATIM_KEYS:
            return {key: value}
        return {f"{key}_present": True, f"{key}_length": len(value)}
    if isinstance(value, list):
        return {f"{key}_type": "list", f"{key}_length": len(value)}
    if isinstance(value, dict):
        return {f"{key}_type": "dict", f"{key}_keys": sorted(str(item) for item in value)}
    return {f"{key}_type": type(value).__name__}


class JsonlAuditLogger:
    """Appends audit events to a JSONL file and reads back the most recent ones."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: AuditEvent) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(event.to_json() + "\n")

    def read(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Return up to ``limit`` newest records at or after ``since``, oldest first."""
        if limit < 1:
            return []
        records = [
            record
            for record in self._iter_records()
            if since is None or _timestamp_of(record) >= since
        ]
        return records[-limit:]

    def _iter_records(self) -> Iterator[dict[str, object]]:
        if not self._path.exists():
            return
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(record, dict):
                    yield record


def _timestamp_of(record: dict[str, object]) -> str:
    value = record.get("timestamp")
    return value if isinstance(value, str) else ""
