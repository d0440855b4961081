"""Built-in clipmerge tools."""

from __future__ import annotations

from collections.abc import Callable

from clipmerge.tools.registry import ToolDispatchError, ToolHandler, ToolRegistry
from clipmerge.workbench import Workbench

DEFAULT_AUDIT_LIMIT = 50
MAX_AUDIT_LIMIT = 500


def register_builtin_tools(
    registry: ToolRegistry,
    workbench: Workbench,
    read_audit_entries: Callable[[str | None, int], list[dict[str, object]]],
) -> None:
    """Register every clip.* tool against one workbench."""
    registry.register("clip.status", lambda _: workbench.status())
    registry.register("clip.add", _add_handler(workbench))
    registry.register("clip.paste", _paste_handler(workbench))
    registry.register("clip.refresh", lambda _: workbench.refresh())
    registry.register("clip.list", lambda _: workbench.list_entries())
    registry.register("clip.set_enabled", _set_enabled_handler(workbench))
    registry.register("clip.toggle", _path_handler("clip.toggle", workbench.toggle))
    registry.register("clip.enable_all", lambda _: workbench.enable_all())
    registry.register("clip.disable_all", lambda _: workbench.disable_all())
    registry.register("clip.remove", _path_handler("clip.remove", workbench.remove))
    registry.register("clip.reset", lambda _: workbench.reset())
    registry.register("clip.render", _render_handler(workbench))
    registry.register("clip.copy_entry", _path_handler("clip.copy_entry", workbench.copy_entry))
    registry.register("clip.audit_log", _audit_log_handler(read_audit_entries))


def _require_path(tool: str, arguments: dict[str, object]) -> str:
    path_value = arguments.get("path")
    if not isinstance(path_value, str) or not path_value:
        raise ToolDispatchError(
            code="INVALID_PARAMS",
            message=f"{tool} path must be a non-empty string.",
        )
    return path_value


def _path_handler(tool: str, action: Callable[[str], dict[str, object]]) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        return action(_require_path(tool, arguments))

    return handler


def _add_handler(workbench: Workbench) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        paths_value = arguments.get("paths")
        if (
            not isinstance(paths_value, list)
            or not paths_value
            or not all(isinstance(item, str) and item for item in paths_value)
        ):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.add paths must be a non-empty list of strings.",
            )
        return workbench.add_paths(paths_value)

    return handler


def _paste_handler(workbench: Workbench) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        text_value = arguments.get("text")
        responses_value = arguments.get("responses", [])
        if text_value is not None and not isinstance(text_value, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.paste text must be a string.",
            )
        if not isinstance(responses_value, list) or not all(
            isinstance(item, str) for item in responses_value
        ):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.paste responses must be a list of strings.",
            )
        return workbench.paste(text_value, responses_value)

    return handler


def _set_enabled_handler(workbench: Workbench) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        path = _require_path("clip.set_enabled", arguments)
        enabled_value = arguments.get("enabled")
        if not isinstance(enabled_value, bool):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.set_enabled enabled must be a boolean.",
            )
        return workbench.set_enabled(path, enabled_value)

    return handler


def _render_handler(workbench: Workbench) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        notes_value = arguments.get("notes")
        code_only_value = arguments.get("code_only", False)
        if notes_value is not None and not isinstance(notes_value, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.render notes must be a string.",
            )
        if not isinstance(code_only_value, bool):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.render code_only must be a boolean.",
            )
        return workbench.render(notes_value, code_only_value)

    return handler


def _audit_log_handler(
    read_audit_entries: Callable[[str | None, int], list[dict[str, object]]],
) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        since = arguments.get("since")
        if since is not None and not isinstance(since, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="clip.audit_log since must be a timestamp string.",
            )
        limit = arguments.get("limit", DEFAULT_AUDIT_LIMIT)
        if isinstance(limit, bool) or not isinstance(limit, int):
            limit = DEFAULT_AUDIT_LIMIT
        # Clamped rather than rejected.
        limit = max(1, min(limit, MAX_AUDIT_LIMIT))
        return {"entries": read_audit_entries(since, limit)}

    return handler
