"""Structured logging utilities."""

from .audit import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp
from .status import DEFAULT_STATUS_CAPACITY, StatusLog, StatusMessage

__all__ = [
    "AuditEvent",
    "DEFAULT_STATUS_CAPACITY",
    "JsonlAuditLogger",
    "StatusLog",
    "StatusMessage",
    "sanitize_arguments",
    "utc_timestamp",
]
