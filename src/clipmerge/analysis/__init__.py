"""Lexical analysis of pasted Java units."""

from .identity import extract_identity, find_package, find_primary_type, has_main_method
from .lexical import Region, RegionSpan, classify, iter_classified, iter_regions, mask_non_code
from .models import Identity, MethodSignature, TypeKind
from .signatures import (
    extract_signatures,
    format_missing_report,
    missing_signatures,
    normalize_parameters,
    strip_comments,
)
from .structure import BraceBalance, is_complete, scan_brace_balance
from .unit import SourceUnit

__all__ = [
    "BraceBalance",
    "Identity",
    "MethodSignature",
    "Region",
    "RegionSpan",
    "SourceUnit",
    "TypeKind",
    "classify",
    "extract_identity",
    "extract_signatures",
    "find_package",
    "find_primary_type",
    "format_missing_report",
    "has_main_method",
    "is_complete",
    "iter_classified",
    "iter_regions",
    "mask_non_code",
    "missing_signatures",
    "normalize_parameters",
    "scan_brace_balance",
    "strip_comments",
]
