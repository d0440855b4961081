"""Tool name to handler mapping used by the STDIO server."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

ToolHandler = Callable[[dict[str, object]], dict[str, object]]


@dataclass(slots=True, frozen=True)
class ToolDispatchError(Exception):
    """A tool call that cannot run: unknown name or bad arguments."""

    code: str
    message: str


class ToolRegistry:
    """Tools in the order they were registered; names are unique."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolHandler] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, name: str, handler: ToolHandler) -> None:
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        self._tools[name] = handler

    def names(self) -> tuple[str, ...]:
        return tuple(self._tools)

    def dispatch(self, name: str, arguments: dict[str, object]) -> dict[str, object]:
        try:
            handler = self._tools[name]
        except KeyError:
            raise ToolDispatchError(code="UNKNOWN_TOOL", message=f"Unknown tool: {name}") from None
        return handler(arguments)
