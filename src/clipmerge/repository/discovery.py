"""Deterministic enumeration of source files from dropped paths."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path

DEFAULT_EXCLUDE_DIR_NAMES = (".git", ".idea", "build", "target", "out", "node_modules")


def has_source_extension(path: Path, extension: str) -> bool:
    """Return True when the file suffix matches the configured source extension."""
    return path.suffix.lower() == extension.lower()


def discover_sources(
    paths: Iterable[Path],
    extension: str = ".java",
    exclude_dir_names: tuple[str, ...] = DEFAULT_EXCLUDE_DIR_NAMES,
) -> list[Path]:
    """Expand files and directories into source files, in stable order.

    Files passed directly are kept when their extension matches. Directories are
    walked recursively with names sorted at each level. Duplicates are dropped,
    first occurrence wins.
    """
    output: list[Path] = []
    seen: set[Path] = set()
    for raw in paths:
        candidate = Path(raw).expanduser()
        if candidate.is_dir():
            found = _walk_directory(candidate, extension, exclude_dir_names)
        elif candidate.is_file() and has_source_extension(candidate, extension):
            found = [candidate]
        else:
            found = []
        for path in found:
            resolved = path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            output.append(resolved)
    return output


def _walk_directory(
    root: Path,
    extension: str,
    exclude_dir_names: tuple[str, ...],
) -> list[Path]:
    found: list[Path] = []
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered_entries = sorted(entries, key=lambda item: item.name)
        except OSError:
            continue
        directories: list[Path] = []
        for entry in ordered_entries:
            full_path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                if _is_excluded_dir(entry.name, exclude_dir_names):
                    continue
                directories.append(full_path)
                continue
            if entry.is_file(follow_symlinks=False) and has_source_extension(
                full_path, extension
            ):
                found.append(full_path)
        stack.extend(reversed(directories))
    return found


def _is_excluded_dir(name: str, exclude_dir_names: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in exclude_dir_names)
