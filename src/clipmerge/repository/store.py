"""In-memory index of known source units."""

from __future__ import annotations

from pathlib import Path

from clipmerge.repository.models import RepositoryEntry


def canonical_path(path: Path | str) -> str:
    """Return the absolute, resolved string form used as the entry key."""
    return str(Path(path).expanduser().resolve(strict=False))


class Repository:
    """Source text, file handles and disabled flags keyed by canonical path.

    The text map and the file map always share the same key set, and every
    disabled path is also a known path. Only the coordinating thread may call
    the mutating methods.
    """

    def __init__(self) -> None:
        self._texts: dict[str, str] = {}
        self._files: dict[str, Path] = {}
        self._disabled: set[str] = set()

    def __len__(self) -> int:
        return len(self._texts)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return canonical_path(path) in self._texts

    def paths(self) -> tuple[str, ...]:
        """Return known paths in insertion order."""
        return tuple(self._texts.keys())

    def files(self) -> tuple[Path, ...]:
        return tuple(self._files[path] for path in self._texts)

    def get(self, path: Path | str) -> RepositoryEntry | None:
        key = canonical_path(path)
        text = self._texts.get(key)
        if text is None:
            return None
        return RepositoryEntry(
            path=key,
            source_text=text,
            file=self._files[key],
            enabled=key not in self._disabled,
        )

    def entries(self) -> list[RepositoryEntry]:
        """Return entry snapshots in insertion order."""
        return [
            RepositoryEntry(
                path=path,
                source_text=text,
                file=self._files[path],
                enabled=path not in self._disabled,
            )
            for path, text in self._texts.items()
        ]

    def enabled_entries(self) -> list[RepositoryEntry]:
        return [entry for entry in self.entries() if entry.enabled]

    def disabled_paths(self) -> tuple[str, ...]:
        return tuple(path for path in self._texts if path in self._disabled)

    def add(self, file: Path, text: str) -> bool:
        """Register a newly loaded file; return False when it is already known."""
        key = canonical_path(file)
        if key in self._texts:
            return False
        self._texts[key] = text
        self._files[key] = Path(key)
        return True

    def put(self, file: Path, text: str) -> RepositoryEntry:
        """Insert or replace an entry and mark it enabled."""
        key = canonical_path(file)
        self._texts[key] = text
        self._files[key] = Path(key)
        self._disabled.discard(key)
        return RepositoryEntry(path=key, source_text=text, file=Path(key), enabled=True)

    def update_text(self, path: Path | str, text: str) -> bool:
        """Replace text of a known entry, keeping its enabled flag."""
        key = canonical_path(path)
        if key not in self._texts:
            return False
        self._texts[key] = text
        return True

    def remove(self, path: Path | str) -> bool:
        key = canonical_path(path)
        if key not in self._texts:
            return False
        del self._texts[key]
        del self._files[key]
        self._disabled.discard(key)
        return True

    def set_enabled(self, path: Path | str, enabled: bool) -> bool:
        key = canonical_path(path)
        if key not in self._texts:
            return False
        if enabled:
            self._disabled.discard(key)
        else:
            self._disabled.add(key)
        return True

    def toggle(self, path: Path | str) -> bool | None:
        """Flip the enabled flag; return the new flag, or None for unknown paths."""
        key = canonical_path(path)
        if key not in self._texts:
            return None
        enabled = key in self._disabled
        self.set_enabled(key, enabled)
        return enabled

    def enable_all(self) -> None:
        self._disabled.clear()

    def disable_all(self) -> None:
        self._disabled = set(self._texts.keys())

    def clear(self) -> None:
        self._texts.clear()
        self._files.clear()
        self._disabled.clear()
