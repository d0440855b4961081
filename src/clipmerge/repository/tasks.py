"""Background file I/O with results applied on the coordinating thread.

Worker tasks never touch the Repository. Each task reads or writes the one
file it was given and returns a plain value; completion callbacks only post
that value onto a single-consumer queue, which the coordinating thread drains
before mutating the Repository.
"""

from __future__ import annotations

import queue
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from clipmerge.repository.fs import FileReadError, FileSystem
from clipmerge.repository.models import ReadResult, RefreshReport
from clipmerge.repository.store import Repository, canonical_path

T = TypeVar("T")


class BackgroundIO:
    """One-shot I/O task dispatcher backed by a thread pool."""

    def __init__(self, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1.")
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="clipmerge-io",
        )

    def run(self, task: Callable[[], T]) -> T:
        """Run one task in the background and wait for its result.

        Exceptions raised by the task propagate to the caller.
        """
        return self._executor.submit(task).result()

    def read_many(self, fs: FileSystem, paths: Iterable[str]) -> list[ReadResult]:
        """Read every path in its own task and collect results through a queue.

        Results are returned in submission order regardless of completion order.
        """
        inbox: queue.SimpleQueue[tuple[int, ReadResult]] = queue.SimpleQueue()
        submitted = 0
        for index, path in enumerate(paths):
            future = self._executor.submit(_read_one, fs, path)
            future.add_done_callback(_post_to(inbox, index, path))
            submitted += 1

        collected: dict[int, ReadResult] = {}
        while len(collected) < submitted:
            index, result = inbox.get()
            collected[index] = result
        return [collected[index] for index in range(submitted)]

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)


def _read_one(fs: FileSystem, path: str) -> ReadResult:
    try:
        return ReadResult(path=path, text=fs.read_all(Path(path)))
    except FileReadError as error:
        return ReadResult(path=path, text=None, error=error.message)


def _post_to(
    inbox: queue.SimpleQueue[tuple[int, ReadResult]],
    index: int,
    path: str,
) -> Callable[[Future[ReadResult]], None]:
    def callback(future: Future[ReadResult]) -> None:
        error = future.exception()
        if error is not None:
            inbox.put((index, ReadResult(path=path, text=None, error=str(error))))
            return
        inbox.put((index, future.result()))

    return callback


def refresh_all(repository: Repository, fs: FileSystem, io: BackgroundIO) -> RefreshReport:
    """Re-read every known file and apply fresh text on the calling thread.

    A failed read leaves that entry untouched and is reported; the remaining
    files are still refreshed. Results for paths removed while the reads were
    in flight are dropped.
    """
    results = io.read_many(fs, repository.paths())
    updated: list[str] = []
    failed: list[tuple[str, str]] = []
    skipped: list[str] = []
    for result in results:
        if not result.ok or result.text is None:
            failed.append((result.path, result.error or "unreadable"))
            continue
        if not repository.update_text(result.path, result.text):
            skipped.append(result.path)
            continue
        updated.append(result.path)
    return RefreshReport(updated=tuple(updated), failed=tuple(failed), skipped=tuple(skipped))


def load_files(
    repository: Repository,
    fs: FileSystem,
    io: BackgroundIO,
    files: Iterable[Path],
) -> RefreshReport:
    """Read files not yet known to the repository and register them."""
    pending: list[str] = []
    skipped: list[str] = []
    for file in files:
        key = canonical_path(file)
        if key in repository or key in pending:
            skipped.append(key)
            continue
        pending.append(key)

    results = io.read_many(fs, pending)
    added: list[str] = []
    failed: list[tuple[str, str]] = []
    for result in results:
        if not result.ok or result.text is None:
            failed.append((result.path, result.error or "unreadable"))
            continue
        if repository.add(Path(result.path), result.text):
            added.append(result.path)
        else:
            skipped.append(result.path)
    return RefreshReport(updated=tuple(added), failed=tuple(failed), skipped=tuple(skipped))
