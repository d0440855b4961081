from __future__ import annotations

import pytest

from clipmerge.analysis import SourceUnit, TypeKind


def test_from_text_derives_identity_and_completeness() -> None:
    unit = SourceUnit.from_text("package a.b;\npublic interface Port {\n}\n")

    assert unit.package_name == "a.b"
    assert unit.type_name == "Port"
    assert unit.type_kind is TypeKind.INTERFACE
    assert unit.is_structurally_complete is True
    assert unit.qualified_name == "a.b.Port"
    assert unit.package_parts() == ("a", "b")
    assert unit.file_name() == "Port.java"


def test_default_package_has_no_parts() -> None:
    unit = SourceUnit.from_text("class Solo {")

    assert unit.package_parts() == ()
    assert unit.is_structurally_complete is False
    assert unit.file_name(".kt") == "Solo.kt"


def test_file_name_requires_a_type() -> None:
    unit = SourceUnit.from_text("// nothing here\n")

    assert unit.type_name is None
    with pytest.raises(ValueError):
        unit.file_name()
