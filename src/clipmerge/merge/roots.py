"""Source-root inference for pasted units."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from clipmerge.analysis import SourceUnit, extract_identity, has_main_method
from clipmerge.merge.collaborators import ConfirmationPrompt
from clipmerge.repository import Repository

MAIN_TYPE_NAME = "Main"


class RootStrategy(str, Enum):
    """Which rule of the priority chain produced a source root."""

    PACKAGE_MATCH = "package_match"
    MAIN_CLASS = "main_class"
    COMMON_ANCESTOR = "common_ancestor"
    FALLBACK = "fallback"


@dataclass(slots=True, frozen=True)
class RootResolution:
    """Inferred source root and the rule that produced it."""

    root: Path
    strategy: RootStrategy


class SourceRootResolver:
    """Infers the base directory a pasted unit's package tree lives under.

    Rules are tried in order: a loaded file whose directory ends with the
    unit's package path; the directory of a loaded ``main`` entry point, with a
    type named ``Main`` preferred and the user asked when several compete; the
    common ancestor of all loaded files; the configured fallback root.
    """

    def __init__(
        self,
        repository: Repository,
        prompt: ConfirmationPrompt,
        fallback_root: Path,
    ) -> None:
        self._repository = repository
        self._prompt = prompt
        self._fallback_root = fallback_root

    def resolve(self, unit: SourceUnit) -> RootResolution:
        files = self._repository.files()

        package_root = _package_root(files, unit.package_parts())
        if package_root is not None:
            return RootResolution(root=package_root, strategy=RootStrategy.PACKAGE_MATCH)

        main_root = self._main_class_root(unit)
        if main_root is not None:
            return RootResolution(root=main_root, strategy=RootStrategy.MAIN_CLASS)

        common = _common_ancestor(files)
        if common is not None:
            return RootResolution(root=common, strategy=RootStrategy.COMMON_ANCESTOR)

        return RootResolution(root=self._fallback_root, strategy=RootStrategy.FALLBACK)

    def _main_class_root(self, unit: SourceUnit) -> Path | None:
        candidates: dict[str, Path] = {}
        for entry in self._repository.entries():
            if not has_main_method(entry.source_text):
                continue
            name = extract_identity(entry.source_text).type_name or entry.file.stem
            candidates.setdefault(name, entry.file)

        if not candidates:
            return None
        if MAIN_TYPE_NAME in candidates:
            return candidates[MAIN_TYPE_NAME].parent
        if len(candidates) == 1:
            return next(iter(candidates.values())).parent

        options = sorted(candidates.keys())
        picked = self._prompt.choose(
            f"Type: {unit.type_name}\n\n"
            "Several loaded types declare a main method.\n"
            "Pick the one whose folder should receive the new type:",
            options,
        )
        if picked is None or picked not in candidates:
            return None
        return candidates[picked].parent


def target_file(root: Path, unit: SourceUnit, extension: str = ".java") -> Path:
    """Return ``root / package path / <TypeName><extension>``."""
    return root.joinpath(*unit.package_parts()) / unit.file_name(extension)


def _package_root(files: tuple[Path, ...], package_parts: tuple[str, ...]) -> Path | None:
    if not package_parts:
        return None
    size = len(package_parts)
    for file in files:
        parent_parts = file.parent.parts
        if len(parent_parts) <= size:
            continue
        if parent_parts[-size:] == package_parts:
            return Path(*parent_parts[:-size])
    return None


def _common_ancestor(files: tuple[Path, ...]) -> Path | None:
    if not files:
        return None
    try:
        return Path(os.path.commonpath([str(file.parent) for file in files]))
    except ValueError:
        return None
