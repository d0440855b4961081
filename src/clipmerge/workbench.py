"""Coordinating owner of the repository and everything that mutates it."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from clipmerge.analysis import extract_identity
from clipmerge.config import ClipConfig
from clipmerge.logging import StatusLog
from clipmerge.merge import MemoryClipboard, PasteOrchestrator, ScriptedPrompt
from clipmerge.repository import (
    BackgroundIO,
    FileSystem,
    LocalFileSystem,
    RefreshReport,
    Repository,
    SessionStore,
    discover_sources,
    load_files,
    refresh_all,
    render_bundle,
    render_code,
    render_entry,
    repository_stats,
)


@dataclass(slots=True, frozen=True)
class UnknownEntryError(Exception):
    """Raised when a tool names a path the repository does not know."""

    path: str


class Workbench:
    """Single-threaded coordinator for repository state.

    Every repository mutation happens inside a Workbench method, on the
    caller's thread. File reads and writes are handed to the background pool
    and their results applied here.
    """

    def __init__(self, config: ClipConfig, fs: FileSystem | None = None) -> None:
        self._config = config
        self._fs = fs or LocalFileSystem()
        self._repository = Repository()
        self._io = BackgroundIO(max_workers=config.refresh.max_workers)
        self._status = StatusLog()
        self._session = SessionStore(config.paths.data_dir)

    @property
    def repository(self) -> Repository:
        return self._repository

    @property
    def status_log(self) -> StatusLog:
        return self._status

    def close(self) -> None:
        self._io.shutdown()

    def restore_session(self) -> RefreshReport:
        """Reload files recorded by the previous run, keeping their disabled flags."""
        snapshot = self._session.load()
        if not snapshot.paths:
            return RefreshReport(updated=(), failed=())
        report = load_files(
            self._repository,
            self._fs,
            self._io,
            [Path(path) for path in snapshot.paths],
        )
        for path in snapshot.disabled:
            self._repository.set_enabled(path, False)
        return report

    def add_paths(self, raw_paths: list[str]) -> dict[str, object]:
        files = discover_sources(
            (self._resolve_input(raw) for raw in raw_paths),
            extension=self._config.sources.extension,
        )
        report = load_files(self._repository, self._fs, self._io, files)
        for path in report.updated:
            self._status.log(f"Loaded: {Path(path).name} ({path})")
        self._persist()
        result = report.to_dict()
        result["discovered"] = len(files)
        result["status"] = [item.message for item in self._status.drain()]
        result["__warnings__"] = [f"Failed to load: {path}" for path, _ in report.failed]
        return result

    def paste(self, text: str | None, responses: list[str]) -> dict[str, object]:
        """Run one paste operation with scripted answers to every prompt."""
        clipboard = MemoryClipboard(text=text)
        prompt = ScriptedPrompt(responses)
        orchestrator = PasteOrchestrator(
            repository=self._repository,
            fs=self._fs,
            prompt=prompt,
            clipboard=clipboard,
            status=self._status,
            fallback_root=self._config.paths.fallback_root,
            extension=self._config.sources.extension,
            io=self._io,
        )
        outcome = orchestrator.paste_from_clipboard(clipboard)
        if outcome.committed:
            self._persist()
        result = outcome.to_dict()
        result["prompts"] = [
            {"message": item.message, "options": list(item.options), "answer": item.answer}
            for item in prompt.transcript
        ]
        result["clipboard"] = clipboard.writes[-1] if clipboard.writes else None
        result["status"] = [item.message for item in self._status.drain()]
        warnings: list[str] = []
        if not outcome.committed and outcome.abort_reason is not None:
            warnings.append(f"Paste aborted: {outcome.abort_reason.value}")
        result["__warnings__"] = warnings
        return result

    def refresh(self) -> dict[str, object]:
        """Re-read every known file; failures are reported per file."""
        report = refresh_all(self._repository, self._fs, self._io)
        result = report.to_dict()
        warnings: list[str] = []
        if self._config.refresh.report_missing_files:
            warnings = [f"File missing: {path}" for path, _ in report.failed]
        result["__warnings__"] = warnings
        return result

    def list_entries(self) -> dict[str, object]:
        entries = []
        for entry in self._repository.entries():
            identity = extract_identity(entry.source_text)
            entries.append(
                {
                    "path": entry.path,
                    "name": entry.name,
                    "enabled": entry.enabled,
                    "characters": len(entry.source_text),
                    "type_name": identity.type_name,
                    "package_name": identity.package_name,
                }
            )
        return {"entries": entries}

    def set_enabled(self, path: str, enabled: bool) -> dict[str, object]:
        if not self._repository.set_enabled(self._resolve_input(path), enabled):
            raise UnknownEntryError(path=path)
        self._persist()
        return {"path": path, "enabled": enabled}

    def toggle(self, path: str) -> dict[str, object]:
        enabled = self._repository.toggle(self._resolve_input(path))
        if enabled is None:
            raise UnknownEntryError(path=path)
        self._persist()
        return {"path": path, "enabled": enabled}

    def enable_all(self) -> dict[str, object]:
        self._repository.enable_all()
        self._persist()
        return {"enabled_count": len(self._repository.enabled_entries())}

    def disable_all(self) -> dict[str, object]:
        self._repository.disable_all()
        self._persist()
        return {"enabled_count": len(self._repository.enabled_entries())}

    def remove(self, path: str) -> dict[str, object]:
        if not self._repository.remove(self._resolve_input(path)):
            raise UnknownEntryError(path=path)
        self._persist()
        return {"path": path, "removed": True}

    def reset(self) -> dict[str, object]:
        removed = len(self._repository)
        self._repository.clear()
        self._session.clear()
        return {"removed": removed}

    def render(self, notes: str | None, code_only: bool) -> dict[str, object]:
        if code_only:
            text = render_code(self._repository)
        else:
            text = render_bundle(self._repository, notes=notes if notes is not None else "")
        stats = repository_stats(self._repository)
        return {
            "text": text,
            "enabled_count": stats.enabled_count,
            "character_count": stats.character_count,
        }

    def copy_entry(self, path: str) -> dict[str, object]:
        entry = self._repository.get(self._resolve_input(path))
        if entry is None:
            raise UnknownEntryError(path=path)
        return {"path": entry.path, "text": render_entry(entry)}

    def status(self) -> dict[str, object]:
        stats = repository_stats(self._repository)
        return {
            "workspace": str(self._config.workspace),
            "total_count": stats.total_count,
            "enabled_count": stats.enabled_count,
            "character_count": stats.character_count,
            "session_path": str(self._session.path),
            "pending_status": [item.message for item in self._status.messages()],
            "effective_config": self._config.to_public_dict(),
        }

    def _resolve_input(self, raw: str) -> Path:
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = self._config.workspace / path
        return path

    def _persist(self) -> None:
        if self._config.session.persist:
            self._session.save(self._repository)
