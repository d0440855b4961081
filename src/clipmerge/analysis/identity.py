"""Lexical identity extraction for pasted Java units."""

from __future__ import annotations

import re

from clipmerge.analysis.lexical import mask_non_code
from clipmerge.analysis.models import Identity, TypeKind

_PACKAGE_RE = re.compile(
    r"\bpackage\s+([A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)\s*;"
)
_TYPE_RE = re.compile(
    r"(?:^|(?<=\s))"
    r"(?:(?:public|protected|private|abstract|final|sealed|non-sealed|static|strictfp)\s+)*"
    r"(class|interface|enum|record)\s+([A-Za-z_][A-Za-z0-9_]*)",
    re.MULTILINE,
)
_MAIN_METHOD_RE = re.compile(
    r"public\s+static\s+void\s+main\s*\(\s*"
    r"(?:final\s+)?String\s*(?:\[\s*\]|\.\.\.)\s*[A-Za-z_$][A-Za-z0-9_$]*\s*\)"
)


def find_package(text: str) -> str | None:
    """Return the first declared package name, searching the raw text."""
    matched = _PACKAGE_RE.search(text)
    if matched is None:
        return None
    return matched.group(1)


def find_primary_type(text: str) -> tuple[TypeKind, str] | None:
    """Return kind and name of the first type declaration outside comments and literals."""
    matched = _TYPE_RE.search(mask_non_code(text))
    if matched is None:
        return None
    return TypeKind(matched.group(1)), matched.group(2)


def extract_identity(text: str | None) -> Identity:
    """Extract package, type name and type kind from source text."""
    if not text:
        return Identity(package_name=None, type_name=None, type_kind=None)
    package_name = find_package(text)
    primary = find_primary_type(text)
    if primary is None:
        return Identity(package_name=package_name, type_name=None, type_kind=None)
    type_kind, type_name = primary
    return Identity(package_name=package_name, type_name=type_name, type_kind=type_kind)


def has_main_method(text: str) -> bool:
    """Return True when text declares a ``public static void main(String[])`` entry point."""
    return _MAIN_METHOD_RE.search(mask_non_code(text)) is not None
