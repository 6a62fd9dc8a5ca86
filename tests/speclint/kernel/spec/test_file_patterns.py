"""Tests for speclint.kernel.spec.file_patterns."""

from __future__ import annotations

from pathlib import Path

import pytest

from speclint.kernel.spec.file_patterns import expand_braces, resolve_patterns


@pytest.fixture
def tree(tmp_path) -> Path:
    for name in ["Classes/A.h", "Classes/A.m", "Classes/Sub/B.m", "Classes/README", "Other/C.c"]:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    return tmp_path


class TestExpandBraces:
    def test_no_braces(self) -> None:
        assert expand_braces("Classes/*.m") == ["Classes/*.m"]

    def test_alternatives(self) -> None:
        assert expand_braces("Classes/*.{h,m}") == ["Classes/*.h", "Classes/*.m"]

    def test_several_groups(self) -> None:
        assert expand_braces("{A,B}/*.{h,m}") == ["A/*.h", "A/*.m", "B/*.h", "B/*.m"]

    def test_nested_groups(self) -> None:
        assert expand_braces("*.{c,{h,m}}") == ["*.c", "*.h", "*.m"]

    def test_unbalanced_is_literal(self) -> None:
        assert expand_braces("*.{h") == ["*.{h"]


class TestResolvePatterns:
    def test_recursive_glob_with_alternatives(self, tree: Path) -> None:
        files = resolve_patterns(tree, ["Classes/**/*.{h,m}"])
        names = sorted(p.relative_to(tree.resolve()).as_posix() for p in files)
        assert names == ["Classes/A.h", "Classes/A.m", "Classes/Sub/B.m"]

    def test_directory_matches_everything_beneath(self, tree: Path) -> None:
        files = resolve_patterns(tree, ["Classes"])
        assert len(files) == 4

    def test_results_are_deduplicated(self, tree: Path) -> None:
        files = resolve_patterns(tree, ["Classes", "Classes/**/*.{h,m}"])
        assert len(files) == len(set(files)) == 4

    def test_no_match(self, tree: Path) -> None:
        assert resolve_patterns(tree, ["Missing/*.m", ""]) == []

    def test_paths_outside_the_root_are_ignored(self, tree: Path) -> None:
        assert resolve_patterns(tree / "Classes", ["../Other/*.c"]) == []
