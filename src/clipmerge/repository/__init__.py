"""Repository of known source units and its file I/O."""

from .discovery import DEFAULT_EXCLUDE_DIR_NAMES, discover_sources, has_source_extension
from .fs import FileReadError, FileSystem, FileWriteError, LocalFileSystem
from .models import ReadResult, RefreshReport, RepositoryEntry, RepositoryStats
from .render import render_bundle, render_code, render_entry, repository_stats
from .session import SESSION_SCHEMA_VERSION, SessionSnapshot, SessionStore
from .store import Repository, canonical_path
from .tasks import BackgroundIO, load_files, refresh_all

__all__ = [
    "BackgroundIO",
    "DEFAULT_EXCLUDE_DIR_NAMES",
    "FileReadError",
    "FileSystem",
    "FileWriteError",
    "LocalFileSystem",
    "ReadResult",
    "RefreshReport",
    "Repository",
    "RepositoryEntry",
    "RepositoryStats",
    "SESSION_SCHEMA_VERSION",
    "SessionSnapshot",
    "SessionStore",
    "canonical_path",
    "discover_sources",
    "has_source_extension",
    "load_files",
    "refresh_all",
    "render_bundle",
    "render_code",
    "render_entry",
    "repository_stats",
]
