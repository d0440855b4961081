"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "clipmerge.toml"
MAX_WORKERS_CAP = 32
DEFAULT_MAX_WORKERS = 4
DEFAULT_EXTENSION = ".java"
DEFAULT_FALLBACK_ROOT = Path("~/Documents/NetBeansProjects/CodeClip/src/main/java")


@dataclass(slots=True, frozen=True)
class PathsConfig:
    """Where pasted units land when nothing else is known, and where state lives."""

    fallback_root: Path
    data_dir: Path


@dataclass(slots=True, frozen=True)
class SourcesConfig:
    """Source file naming."""

    extension: str


@dataclass(slots=True, frozen=True)
class RefreshConfig:
    """Background I/O settings."""

    max_workers: int
    report_missing_files: bool


@dataclass(slots=True, frozen=True)
class SessionConfig:
    """Loaded-file persistence toggle."""

    persist: bool


@dataclass(slots=True, frozen=True)
class ClipConfig:
    """Fully merged configuration."""

    workspace: Path
    paths: PathsConfig
    sources: SourcesConfig
    refresh: RefreshConfig
    session: SessionConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for tool responses."""
        return {
            "workspace": str(self.workspace),
            "paths": {
                "fallback_root": str(self.paths.fallback_root),
                "data_dir": str(self.paths.data_dir),
            },
            "sources": {"extension": self.sources.extension},
            "refresh": {
                "max_workers": self.refresh.max_workers,
                "report_missing_files": self.refresh.report_missing_files,
            },
            "session": {"persist": self.session.persist},
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    fallback_root: Path | None = None
    max_workers: int | None = None
    persist_session: bool | None = None


def default_config(workspace: Path) -> ClipConfig:
    """Build default config for a given workspace directory."""
    resolved = workspace.resolve()
    return ClipConfig(
        workspace=resolved,
        paths=PathsConfig(
            fallback_root=DEFAULT_FALLBACK_ROOT.expanduser(),
            data_dir=resolved / ".clipmerge",
        ),
        sources=SourcesConfig(extension=DEFAULT_EXTENSION),
        refresh=RefreshConfig(max_workers=DEFAULT_MAX_WORKERS, report_missing_files=True),
        session=SessionConfig(persist=True),
    )


def load_config_file(workspace: Path) -> dict[str, object]:
    """Load optional clipmerge.toml from the workspace."""
    config_path = workspace / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_path(value: object, name: str, base: Path, default: Path) -> Path:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def _extension(value: object, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.startswith(".") or len(value) < 2:
        raise ValueError("Config field 'sources.extension' must look like '.java'.")
    return value


def merge_config(
    base: ClipConfig, payload: dict[str, object], overrides: CliOverrides
) -> ClipConfig:
    """Merge defaults, workspace config, then CLI/startup overrides."""
    paths_payload = _get_table(payload, "paths")
    sources_payload = _get_table(payload, "sources")
    refresh_payload = _get_table(payload, "refresh")
    session_payload = _get_table(payload, "session")

    merged = ClipConfig(
        workspace=base.workspace,
        paths=PathsConfig(
            fallback_root=_optional_path(
                paths_payload.get("fallback_root"),
                "paths.fallback_root",
                base.workspace,
                base.paths.fallback_root,
            ),
            data_dir=_optional_path(
                paths_payload.get("data_dir"),
                "paths.data_dir",
                base.workspace,
                base.paths.data_dir,
            ),
        ),
        sources=SourcesConfig(
            extension=_extension(sources_payload.get("extension"), base.sources.extension)
        ),
        refresh=RefreshConfig(
            max_workers=_optional_positive_int_with_cap(
                refresh_payload.get("max_workers"),
                "refresh.max_workers",
                base.refresh.max_workers,
                MAX_WORKERS_CAP,
            ),
            report_missing_files=_optional_bool(
                refresh_payload.get("report_missing_files"),
                "refresh.report_missing_files",
                base.refresh.report_missing_files,
            ),
        ),
        session=SessionConfig(
            persist=_optional_bool(
                session_payload.get("persist"),
                "session.persist",
                base.session.persist,
            )
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: ClipConfig, overrides: CliOverrides) -> ClipConfig:
    """Apply startup overrides at highest precedence."""
    max_workers = _optional_positive_int_with_cap(
        overrides.max_workers,
        "overrides.max_workers",
        config.refresh.max_workers,
        MAX_WORKERS_CAP,
    )
    data_dir = overrides.data_dir or config.paths.data_dir
    fallback_root = overrides.fallback_root or config.paths.fallback_root
    persist = (
        overrides.persist_session
        if overrides.persist_session is not None
        else config.session.persist
    )
    return ClipConfig(
        workspace=config.workspace,
        paths=PathsConfig(
            fallback_root=fallback_root.expanduser().resolve(),
            data_dir=data_dir.resolve(),
        ),
        sources=config.sources,
        refresh=RefreshConfig(
            max_workers=max_workers,
            report_missing_files=config.refresh.report_missing_files,
        ),
        session=SessionConfig(persist=persist),
    )


def load_effective_config(workspace: Path, overrides: CliOverrides | None = None) -> ClipConfig:
    """Load effective config using merge order defaults -> workspace file -> overrides."""
    resolved = workspace.resolve()
    base = default_config(resolved)
    payload = load_config_file(resolved)
    return merge_config(base, payload, overrides or CliOverrides())
