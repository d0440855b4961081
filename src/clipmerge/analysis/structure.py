"""Brace-balance completeness check over code regions."""

from __future__ import annotations

from dataclasses import dataclass

from clipmerge.analysis.lexical import Region, iter_classified


@dataclass(slots=True, frozen=True)
class BraceBalance:
    """Brace counters gathered from code regions only."""

    balance: int
    unmatched_closing: int
    unclosed_opening: int


def scan_brace_balance(text: str | None) -> BraceBalance:
    """Count structural braces, ignoring braces inside comments and literals."""
    balance = 0
    depth = 0
    unmatched_closing = 0
    for _, char, region in iter_classified(text or ""):
        if region is not Region.CODE:
            continue
        if char == "{":
            balance += 1
            depth += 1
        elif char == "}":
            balance -= 1
            if depth == 0:
                unmatched_closing += 1
            else:
                depth -= 1
    return BraceBalance(
        balance=balance,
        unmatched_closing=unmatched_closing,
        unclosed_opening=depth,
    )


def is_complete(text: str | None) -> bool:
    """Return True when code-region braces balance to zero.

    Only the balance is checked: ``"} {"`` counts as complete even though the
    braces are not correctly nested.
    """
    if not text:
        return False
    return scan_brace_balance(text).balance == 0
