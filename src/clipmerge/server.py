"""JSON-lines STDIO server and ``clipmerge`` entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from clipmerge.config import CliOverrides, ClipConfig, load_effective_config
from clipmerge.logging import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp
from clipmerge.repository import FileSystem
from clipmerge.tools import ToolDispatchError, ToolRegistry, register_builtin_tools
from clipmerge.workbench import UnknownEntryError, Workbench


@dataclass(slots=True, frozen=True)
class Request:
    """A validated request line."""

    request_id: str
    method: str
    params: dict[str, object]


@dataclass(slots=True, frozen=True)
class RequestError(Exception):
    """Request line rejected before any tool ran."""

    code: str
    message: str


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clipmerge",
        description="Reconcile pasted Java source with an on-disk tree over STDIO.",
    )
    parser.add_argument("--workspace", default=".", help="directory holding clipmerge.toml")
    parser.add_argument("--data-dir", default=None, help="where audit and session files live")
    parser.add_argument("--fallback-root", default=None, help="source root of last resort")
    parser.add_argument("--max-workers", type=int, default=None, help="background I/O threads")
    parser.add_argument("--persist-session", choices=("true", "false"), default=None)
    return parser


class StdioServer:
    """Reads one JSON request per line, answers with one JSON envelope per line.

    Requests name a ``clip.*`` tool directly as ``method`` or go through
    ``tools/call``. Every dispatched call, successful or not, is appended to
    ``<data_dir>/audit.jsonl``.
    """

    def __init__(self, config: ClipConfig, fs: FileSystem | None = None) -> None:
        self._config = config
        self._audit = JsonlAuditLogger(path=config.paths.data_dir / "audit.jsonl")
        self._workbench = Workbench(config=config, fs=fs)
        self._registry = ToolRegistry()
        register_builtin_tools(
            self._registry,
            workbench=self._workbench,
            read_audit_entries=self._audit.read,
        )
        self._generated_ids = 0

    @property
    def workbench(self) -> Workbench:
        return self._workbench

    def restore_session(self) -> list[str]:
        """Reload files from the previous run; one warning per file that is gone."""
        if not self._config.session.persist:
            return []
        report = self._workbench.restore_session()
        return [f"Session file missing: {path}" for path, _ in report.failed]

    def close(self) -> None:
        self._workbench.close()

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        for raw_line in in_stream:
            if not raw_line.strip():
                continue
            envelope = self.handle_json_line(raw_line.strip())
            out_stream.write(json.dumps(envelope, sort_keys=True) + "\n")
            out_stream.flush()

    def handle_json_line(self, raw_line: str) -> dict[str, object]:
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            request_id = self.next_request_id()
            envelope = error_envelope(request_id, "INVALID_JSON", "Request must be valid JSON.")
            self._record(request_id, "invalid_json", {"raw_line_length": len(raw_line)}, envelope)
            return envelope
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object]:
        """Validate one decoded request, run its tool and return the envelope."""
        request_id = self._request_id_of(payload)
        try:
            request = parse_request(payload, request_id)
        except RequestError as error:
            envelope = error_envelope(request_id, error.code, error.message)
            self._record(request_id, "invalid_request", {}, envelope)
            return envelope

        if request.method == "tools/list":
            return success_envelope(request_id, {"tools": list(self._registry.names())})
        try:
            tool_name, arguments = resolve_tool_call(request)
        except RequestError as error:
            return error_envelope(request_id, error.code, error.message)

        envelope = self._run_tool(request_id, tool_name, arguments)
        self._record(request_id, tool_name, arguments, envelope)
        return envelope

    def next_request_id(self) -> str:
        self._generated_ids += 1
        return f"req-{self._generated_ids:06d}"

    def _request_id_of(self, payload: object) -> str:
        raw = payload.get("id") if isinstance(payload, dict) else None
        if isinstance(raw, str) and raw:
            return raw
        if isinstance(raw, int) and not isinstance(raw, bool):
            return str(raw)
        return self.next_request_id()

    def _run_tool(
        self,
        request_id: str,
        tool_name: str,
        arguments: dict[str, object],
    ) -> dict[str, object]:
        try:
            result = self._registry.dispatch(name=tool_name, arguments=arguments)
        except ToolDispatchError as error:
            return error_envelope(request_id, error.code, error.message)
        except UnknownEntryError as error:
            return error_envelope(
                request_id, "UNKNOWN_ENTRY", f"No loaded file at path: {error.path}"
            )
        except Exception:
            return error_envelope(
                request_id, "INTERNAL_ERROR", "Unhandled server error while executing tool."
            )
        warnings = _extract_result_warnings(result)
        return success_envelope(request_id, result, warnings)

    def _record(
        self,
        request_id: str,
        tool_name: str,
        arguments: dict[str, object],
        envelope: dict[str, object],
    ) -> None:
        error = envelope.get("error")
        error_code = error.get("code") if isinstance(error, dict) else None
        self._audit.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                request_id=request_id,
                tool=tool_name,
                ok=envelope.get("ok") is True,
                blocked=envelope.get("blocked") is True,
                error_code=error_code if isinstance(error_code, str) else None,
                metadata=sanitize_arguments(arguments),
            )
        )


def parse_request(payload: object, request_id: str) -> Request:
    """Check the request shape; raise RequestError naming what is wrong."""
    if not isinstance(payload, dict):
        raise RequestError(code="INVALID_REQUEST", message="Request must be an object.")
    method = payload.get("method")
    params = payload.get("params", {})
    if not isinstance(method, str) or not method:
        raise RequestError(
            code="INVALID_REQUEST", message="Request method must be a non-empty string."
        )
    if not isinstance(params, dict):
        raise RequestError(code="INVALID_PARAMS", message="Request params must be an object.")
    return Request(request_id=request_id, method=method, params=params)


def resolve_tool_call(request: Request) -> tuple[str, dict[str, object]]:
    """Return the tool name and arguments, unwrapping ``tools/call`` requests."""
    if request.method != "tools/call":
        return request.method, request.params
    name = request.params.get("name")
    arguments = request.params.get("arguments", {})
    if not isinstance(name, str) or not name:
        raise RequestError(
            code="INVALID_PARAMS",
            message="tools/call params.name must be a non-empty string.",
        )
    if not isinstance(arguments, dict):
        raise RequestError(
            code="INVALID_PARAMS",
            message="tools/call params.arguments must be an object.",
        )
    return name, arguments


def success_envelope(
    request_id: str,
    result: dict[str, object],
    warnings: list[str] | None = None,
) -> dict[str, object]:
    return {
        "request_id": request_id,
        "ok": True,
        "result": result,
        "warnings": warnings or [],
        "blocked": False,
    }


def error_envelope(request_id: str, code: str, message: str) -> dict[str, object]:
    return {
        "request_id": request_id,
        "ok": False,
        "result": {},
        "warnings": [],
        "blocked": False,
        "error": {"code": code, "message": message},
    }


def create_server(
    workspace: str,
    data_dir: str | None = None,
    cli_overrides: CliOverrides | None = None,
    fs: FileSystem | None = None,
) -> StdioServer:
    """Load the effective config for a workspace and build a server around it."""
    overrides = cli_overrides or CliOverrides()
    if data_dir is not None and overrides.data_dir is None:
        overrides = CliOverrides(
            data_dir=Path(data_dir).resolve(),
            fallback_root=overrides.fallback_root,
            max_workers=overrides.max_workers,
            persist_session=overrides.persist_session,
        )
    config = load_effective_config(workspace=Path(workspace).resolve(), overrides=overrides)
    return StdioServer(config=config, fs=fs)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    persist_session = None if args.persist_session is None else args.persist_session == "true"
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        fallback_root=Path(args.fallback_root) if args.fallback_root is not None else None,
        max_workers=args.max_workers,
        persist_session=persist_session,
    )
    server = create_server(workspace=args.workspace, cli_overrides=overrides)
    for warning in server.restore_session():
        print(warning, file=sys.stderr)
    try:
        server.serve(in_stream=sys.stdin, out_stream=sys.stdout)
    finally:
        server.close()
    return 0


def _extract_result_warnings(result: dict[str, object]) -> list[str]:
    raw = result.pop("__warnings__", None)
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, str)]


if __name__ == "__main__":
    raise SystemExit(main())
