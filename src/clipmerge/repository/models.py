"""Typed models for repository state."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class RepositoryEntry:
    """Snapshot of one known source unit."""

    path: str
    source_text: str
    file: Path
    enabled: bool = True

    @property
    def name(self) -> str:
        return self.file.name


@dataclass(slots=True, frozen=True)
class ReadResult:
    """Outcome of one background file read."""

    path: str
    text: str | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True, frozen=True)
class RefreshReport:
    """Result of one bulk refresh or load pass."""

    updated: tuple[str, ...]
    failed: tuple[tuple[str, str], ...]
    skipped: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "updated": list(self.updated),
            "failed": [{"path": path, "message": message} for path, message in self.failed],
            "skipped": list(self.skipped),
        }


@dataclass(slots=True, frozen=True)
class RepositoryStats:
    """Counters for the aggregated view."""

    total_count: int
    enabled_count: int
    character_count: int
