"""Filesystem access used for loading, refreshing and writing source units."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(slots=True, frozen=True)
class FileReadError(Exception):
    """Raised when a source file cannot be read."""

    path: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True, frozen=True)
class FileWriteError(Exception):
    """Raised when a source file cannot be written."""

    path: str
    message: str

    def __str__(self) -> str:
        return self.message


class FileSystem(Protocol):
    def read_all(self, path: Path) -> str:
        """Return file text or raise FileReadError."""

    def write_all(self, path: Path, text: str) -> None:
        """Write file text or raise FileWriteError."""

    def exists(self, path: Path) -> bool:
        """Return True when path exists."""

    def mkdirs(self, path: Path) -> None:
        """Create a directory and its parents."""


class LocalFileSystem:
    """UTF-8 filesystem access that round-trips text byte for byte."""

    def read_all(self, path: Path) -> str:
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as error:
            raise FileReadError(path=str(path), message=str(error)) from error

    def write_all(self, path: Path, text: str) -> None:
        try:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError as error:
            raise FileWriteError(path=str(path), message=str(error)) from error

    def exists(self, path: Path) -> bool:
        return path.exists()

    def mkdirs(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise FileWriteError(path=str(path), message=str(error)) from error
