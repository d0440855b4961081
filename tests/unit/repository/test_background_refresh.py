from __future__ import annotations

import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from clipmerge.repository import (
    BackgroundIO,
    FileReadError,
    LocalFileSystem,
    Repository,
    canonical_path,
    load_files,
    refresh_all,
)


class RecordingFileSystem(LocalFileSystem):
    """Local filesystem that remembers which threads performed reads."""

    def __init__(self) -> None:
        self.read_threads: list[str] = []
        self._lock = threading.Lock()

    def read_all(self, path: Path) -> str:
        with self._lock:
            self.read_threads.append(threading.current_thread().name)
        return super().read_all(path)


@pytest.fixture()
def io() -> Iterator[BackgroundIO]:
    pool = BackgroundIO(max_workers=2)
    yield pool
    pool.shutdown()


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_files_reads_in_background_and_registers(tmp_path: Path, io: BackgroundIO) -> None:
    a = _write(tmp_path / "A.java", "class A {}")
    b = _write(tmp_path / "B.java", "class B {}")
    fs = RecordingFileSystem()
    repository = Repository()

    report = load_files(repository, fs, io, [a, b, a])

    assert report.updated == (canonical_path(a), canonical_path(b))
    assert report.skipped == (canonical_path(a),)
    assert report.failed == ()
    assert all(name.startswith("clipmerge-io") for name in fs.read_threads)
    assert [entry.source_text for entry in repository.entries()] == ["class A {}", "class B {}"]


def test_load_files_skips_already_known_files(tmp_path: Path, io: BackgroundIO) -> None:
    a = _write(tmp_path / "A.java", "class A {}")
    repository = Repository()
    repository.add(a, "cached")

    report = load_files(repository, LocalFileSystem(), io, [a])

    assert report.updated == ()
    assert report.skipped == (canonical_path(a),)
    entry = repository.get(a)
    assert entry is not None
    assert entry.source_text == "cached"


def test_refresh_updates_readable_files_and_reports_failures(
    tmp_path: Path, io: BackgroundIO
) -> None:
    a = _write(tmp_path / "A.java", "class A {}")
    b = _write(tmp_path / "B.java", "class B {}")
    repository = Repository()
    load_files(repository, LocalFileSystem(), io, [a, b])
    repository.set_enabled(a, False)

    a.write_text("class A { int fresh; }", encoding="utf-8")
    b.unlink()
    report = refresh_all(repository, LocalFileSystem(), io)

    assert report.updated == (canonical_path(a),)
    assert [path for path, _ in report.failed] == [canonical_path(b)]
    entry_a = repository.get(a)
    entry_b = repository.get(b)
    assert entry_a is not None and entry_a.source_text == "class A { int fresh; }"
    assert entry_a.enabled is False
    assert entry_b is not None and entry_b.source_text == "class B {}"


def test_results_for_entries_removed_mid_flight_are_not_applied(
    tmp_path: Path, io: BackgroundIO
) -> None:
    a = _write(tmp_path / "A.java", "class A {}")
    repository = Repository()
    load_files(repository, LocalFileSystem(), io, [a])

    results = io.read_many(LocalFileSystem(), repository.paths())
    repository.remove(a)

    assert results[0].ok is True
    assert repository.update_text(results[0].path, results[0].text or "") is False
    assert a not in repository


def test_read_many_preserves_submission_order(tmp_path: Path, io: BackgroundIO) -> None:
    paths = [
        str(_write(tmp_path / f"F{index}.java", f"class F{index} {{}}")) for index in range(6)
    ]

    results = io.read_many(LocalFileSystem(), paths)

    assert [result.path for result in results] == paths
    assert [result.text for result in results] == [f"class F{index} {{}}" for index in range(6)]


def test_run_propagates_task_errors(io: BackgroundIO) -> None:
    def boom() -> str:
        raise FileReadError(path="x", message="nope")

    with pytest.raises(FileReadError):
        io.run(boom)


def test_max_workers_must_be_positive() -> None:
    with pytest.raises(ValueError):
        BackgroundIO(max_workers=0)
