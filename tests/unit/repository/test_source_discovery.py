from __future__ import annotations

from pathlib import Path

from clipmerge.repository import discover_sources, has_source_extension


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("class X {}", encoding="utf-8")
    return path


def test_directories_are_walked_depth_first_in_name_order(tmp_path: Path) -> None:
    _touch(tmp_path / "src" / "b" / "B.java")
    _touch(tmp_path / "src" / "a" / "A.java")
    _touch(tmp_path / "src" / "Z.java")
    _touch(tmp_path / "src" / "notes.txt")

    found = discover_sources([tmp_path / "src"])

    assert [path.relative_to(tmp_path.resolve()).as_posix() for path in found] == [
        "src/Z.java",
        "src/a/A.java",
        "src/b/B.java",
    ]


def test_excluded_directories_are_skipped(tmp_path: Path) -> None:
    _touch(tmp_path / "target" / "Gen.java")
    _touch(tmp_path / ".git" / "Hook.java")
    kept = _touch(tmp_path / "Main.java")

    assert discover_sources([tmp_path]) == [kept.resolve()]


def test_direct_files_are_filtered_and_deduplicated(tmp_path: Path) -> None:
    java = _touch(tmp_path / "A.java")
    text = _touch(tmp_path / "readme.md")

    found = discover_sources([java, text, tmp_path, tmp_path / "missing.java"])

    assert found == [java.resolve()]


def test_extension_match_is_case_insensitive() -> None:
    assert has_source_extension(Path("A.JAVA"), ".java") is True
    assert has_source_extension(Path("A.kt"), ".java") is False


def test_custom_extension(tmp_path: Path) -> None:
    kotlin = _touch(tmp_path / "A.kt")
    _touch(tmp_path / "B.java")

    assert discover_sources([tmp_path], extension=".kt") == [kotlin.resolve()]
