"""Single-pass lexical classifier for Java-like source text."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class Region(str, Enum):
    """Mutually exclusive lexical region of one character."""

    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING_LITERAL = "string_literal"
    CHAR_LITERAL = "char_literal"


@dataclass(slots=True, frozen=True)
class RegionSpan:
    """Contiguous run of characters sharing one region, end-exclusive."""

    region: Region
    start: int
    end: int


_LITERAL_CLOSERS = {
    Region.STRING_LITERAL: '"',
    Region.CHAR_LITERAL: "'",
}


def iter_classified(text: str) -> Iterator[tuple[int, str, Region]]:
    """Yield ``(offset, char, region)`` for every character of text.

    Opening and closing markers belong to the region they delimit. A newline
    that ends a line comment is classified as code. Unterminated comments and
    literals stay open until end of input.
    """
    state = Region.CODE
    escape = False
    length = len(text)
    index = 0

    while index < length:
        char = text[index]
        next_char = text[index + 1] if index + 1 < length else ""

        if state is Region.LINE_COMMENT:
            if char == "\n":
                state = Region.CODE
                yield index, char, Region.CODE
            else:
                yield index, char, Region.LINE_COMMENT
            index += 1
            continue

        if state is Region.BLOCK_COMMENT:
            if char == "*" and next_char == "/":
                yield index, char, Region.BLOCK_COMMENT
                yield index + 1, next_char, Region.BLOCK_COMMENT
                state = Region.CODE
                index += 2
                continue
            yield index, char, Region.BLOCK_COMMENT
            index += 1
            continue

        if state in _LITERAL_CLOSERS:
            yield index, char, state
            if char == _LITERAL_CLOSERS[state] and not escape:
                state = Region.CODE
            escape = char == "\\" and not escape
            index += 1
            continue

        if char == "/" and next_char == "/":
            state = Region.LINE_COMMENT
            yield index, char, state
            yield index + 1, next_char, state
            index += 2
            continue
        if char == "/" and next_char == "*":
            state = Region.BLOCK_COMMENT
            yield index, char, state
            yield index + 1, next_char, state
            index += 2
            continue
        if char == '"':
            state = Region.STRING_LITERAL
            escape = False
        elif char == "'":
            state = Region.CHAR_LITERAL
            escape = False
        yield index, char, state
        index += 1


def classify(text: str) -> list[Region]:
    """Return the region of every character position in text."""
    return [region for _, _, region in iter_classified(text)]


def iter_regions(text: str) -> Iterator[RegionSpan]:
    """Yield contiguous region spans in textual order."""
    current: Region | None = None
    start = 0
    for offset, _, region in iter_classified(text):
        if region is not current:
            if current is not None:
                yield RegionSpan(region=current, start=start, end=offset)
            current = region
            start = offset
    if current is not None:
        yield RegionSpan(region=current, start=start, end=len(text))


def mask_non_code(text: str, placeholder: str = " ") -> str:
    """Replace comment and literal characters while preserving offsets and line count."""
    if len(placeholder) != 1:
        raise ValueError("placeholder must be a single character.")
    chars = list(text)
    for offset, char, region in iter_classified(text):
        if region is not Region.CODE and char != "\n":
            chars[offset] = placeholder
    return "".join(chars)
