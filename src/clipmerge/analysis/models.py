"""Value types produced by the analysis layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TypeKind(str, Enum):
    """Kind of a top-level Java type declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"


@dataclass(slots=True, frozen=True)
class Identity:
    """Package and primary type of one source unit."""

    package_name: str | None
    type_name: str | None
    type_kind: TypeKind | None

    @property
    def resolved(self) -> bool:
        """Return True when a type declaration was found."""
        return self.type_name is not None

    @property
    def qualified_name(self) -> str | None:
        """Return ``package.Type`` or the bare type name without a package."""
        if self.type_name is None:
            return None
        if self.package_name:
            return f"{self.package_name}.{self.type_name}"
        return self.type_name


@dataclass(slots=True, frozen=True, order=True)
class MethodSignature:
    """Normalized method shape used for regression comparison.

    ``parameter_types`` is the comma-joined list of declared parameter types,
    with parameter names discarded.
    """

    return_type: str
    name: str
    parameter_types: str

    def __str__(self) -> str:
        return f"{self.return_type} {self.name}({self.parameter_types})"
