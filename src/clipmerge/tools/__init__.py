"""Tool interfaces and registrations."""

from .builtin import DEFAULT_AUDIT_LIMIT, MAX_AUDIT_LIMIT, register_builtin_tools
from .registry import ToolDispatchError, ToolHandler, ToolRegistry

__all__ = [
    "DEFAULT_AUDIT_LIMIT",
    "MAX_AUDIT_LIMIT",
    "ToolDispatchError",
    "ToolHandler",
    "ToolRegistry",
    "register_builtin_tools",
]
