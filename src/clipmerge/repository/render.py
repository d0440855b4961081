"""Aggregated text output of enabled repository entries."""

from __future__ import annotations

from clipmerge.repository.models import RepositoryEntry, RepositoryStats
from clipmerge.repository.store import Repository

NOTES_HEADER = "\n\n// === Notes ===\n"
NOTES_END_MARK = "\n// === END NOTES ==="


def entry_header(entry: RepositoryEntry) -> str:
    return f"// ===== {entry.name} =====\n"


def render_entry(entry: RepositoryEntry) -> str:
    """Render one entry the way a single-entry copy presents it."""
    return f"{entry_header(entry)}{entry.source_text}\n"


def render_code(repository: Repository) -> str:
    """Concatenate enabled entries in insertion order, each under a file header."""
    parts: list[str] = []
    for entry in repository.enabled_entries():
        parts.append(entry_header(entry))
        parts.append(entry.source_text)
        parts.append("\n\n")
    return "".join(parts)


def render_bundle(repository: Repository, notes: str | None = None) -> str:
    """Render enabled code, followed by a delimited notes block when notes are given."""
    code = render_code(repository)
    if notes is None:
        return code
    return f"{code}{NOTES_HEADER}{notes}{NOTES_END_MARK}"


def repository_stats(repository: Repository) -> RepositoryStats:
    total = len(repository)
    enabled = len(repository.enabled_entries())
    return RepositoryStats(
        total_count=total,
        enabled_count=enabled,
        character_count=len(render_code(repository)),
    )
