"""Method signature extraction and old-vs-new regression diffing.

Extraction is line-oriented and heuristic. Comments are stripped before
matching but string literals are not, so method-like text inside a string can
be reported as a signature. Multi-line signatures, annotations on the
declaration line and generic return types containing commas are not matched.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from clipmerge.analysis.models import MethodSignature

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//.*")
_METHOD_RE = re.compile(
    r"^[ \t]*"
    r"(?:(?:public|protected|private)\s+)?"
    r"(?:(?:static|final|abstract)\s+)*"
    r"([\w<>\[\]]+)\s+"
    r"(\w+)\s*"
    r"\(([^)]*)\)",
    re.MULTILINE,
)
# Tokens that can never be a return type or method name. Without this an
# optional access modifier lets `public Foo(...)` or `return call(...)` match.
_RESERVED = frozenset(
    {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "abstract",
        "return",
        "new",
        "throw",
        "else",
        "case",
        "if",
        "for",
        "while",
        "do",
        "switch",
        "catch",
        "try",
        "synchronized",
        "yield",
        "assert",
        "class",
        "interface",
        "enum",
        "record",
        "package",
        "import",
    }
)


def strip_comments(text: str) -> str:
    """Remove block comments, then line comments."""
    without_blocks = _BLOCK_COMMENT_RE.sub("", text)
    return _LINE_COMMENT_RE.sub("", without_blocks)


def normalize_parameters(params: str) -> str:
    """Keep only the leading type token of each comma-separated parameter."""
    if not params.strip():
        return ""
    normalized: list[str] = []
    for part in params.split(","):
        tokens = part.split()
        normalized.append(tokens[0] if tokens else "")
    return ",".join(normalized)


def extract_signatures(text: str | None) -> frozenset[MethodSignature]:
    """Extract the deduplicated set of method signatures declared in text."""
    if not text:
        return frozenset()
    signatures: set[MethodSignature] = set()
    for matched in _METHOD_RE.finditer(strip_comments(text)):
        return_type, name, params = matched.group(1), matched.group(2), matched.group(3)
        if return_type in _RESERVED or name in _RESERVED:
            continue
        signatures.add(
            MethodSignature(
                return_type=return_type,
                name=name,
                parameter_types=normalize_parameters(params),
            )
        )
    return frozenset(signatures)


def missing_signatures(old_text: str | None, new_text: str | None) -> frozenset[MethodSignature]:
    """Return signatures present in old_text but absent from new_text."""
    return extract_signatures(old_text) - extract_signatures(new_text)


def format_missing_report(type_name: str, missing: Iterable[MethodSignature]) -> str:
    """Render the diagnostic listing missing signatures in stable order."""
    lines = [f"Warning: the new code for {type_name} is missing these methods:"]
    for signature in sorted(missing):
        lines.append(f"  - {signature}")
    lines.append("")
    lines.append("Check that no functionality was dropped before overwriting.")
    return "\n".join(lines) + "\n"
