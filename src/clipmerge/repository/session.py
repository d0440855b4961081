"""Persistence of the loaded file list between runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from clipmerge.repository.store import Repository

SESSION_SCHEMA_VERSION = 1


@dataclass(slots=True, frozen=True)
class SessionSnapshot:
    """Loaded paths in insertion order plus the disabled subset."""

    paths: tuple[str, ...]
    disabled: tuple[str, ...]


class SessionStore:
    """Reads and atomically writes ``session.json`` under the data directory."""

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir.resolve() / "session.json"

    @property
    def path(self) -> Path:
        return self._path

    def save(self, repository: Repository) -> SessionSnapshot:
        """Persist the repository's paths and disabled flags."""
        snapshot = SessionSnapshot(
            paths=repository.paths(),
            disabled=repository.disabled_paths(),
        )
        payload = {
            "schema_version": SESSION_SCHEMA_VERSION,
            "paths": list(snapshot.paths),
            "disabled": list(snapshot.disabled),
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, sort_keys=True)
            handle.write("\n")
        tmp.replace(self._path)
        return snapshot

    def load(self) -> SessionSnapshot:
        """Return the stored snapshot, or an empty one when absent or unusable."""
        empty = SessionSnapshot(paths=(), disabled=())
        if not self._path.exists():
            return empty
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError:
            return empty
        if not isinstance(payload, dict):
            return empty
        if payload.get("schema_version") != SESSION_SCHEMA_VERSION:
            return empty
        return SessionSnapshot(
            paths=_string_tuple(payload.get("paths")),
            disabled=_string_tuple(payload.get("disabled")),
        )

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


def _string_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))
