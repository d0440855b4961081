"""Immutable view of one pasted or file-backed source unit."""

from __future__ import annotations

from dataclasses import dataclass

from clipmerge.analysis.identity import extract_identity
from clipmerge.analysis.models import TypeKind
from clipmerge.analysis.structure import is_complete


@dataclass(slots=True, frozen=True)
class SourceUnit:
    """Raw text plus the identity and completeness derived from it."""

    raw_text: str
    package_name: str | None
    type_name: str | None
    type_kind: TypeKind | None
    is_structurally_complete: bool

    @classmethod
    def from_text(cls, text: str) -> SourceUnit:
        """Run identity extraction and the brace scanner over text."""
        identity = extract_identity(text)
        return cls(
            raw_text=text,
            package_name=identity.package_name,
            type_name=identity.type_name,
            type_kind=identity.type_kind,
            is_structurally_complete=is_complete(text),
        )

    @property
    def qualified_name(self) -> str | None:
        if self.type_name is None:
            return None
        if self.package_name:
            return f"{self.package_name}.{self.type_name}"
        return self.type_name

    def file_name(self, extension: str = ".java") -> str:
        """Return the file name the unit is stored under."""
        if self.type_name is None:
            raise ValueError("Source unit has no type name.")
        return f"{self.type_name}{extension}"

    def package_parts(self) -> tuple[str, ...]:
        """Return package segments, empty for the default package."""
        if not self.package_name:
            return ()
        return tuple(self.package_name.split("."))
