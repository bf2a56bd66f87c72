"""Unit tests for ambit.linker.patterns: repository-side wildcard matching."""
from __future__ import annotations

from pathlib import Path

import pytest

from ambit.linker.filesystem import LocalFilesystem
from ambit.linker.patterns import compile_component, has_wildcard, match_pattern, unescape


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_tree(root: Path, *files: str) -> None:
    for name in files:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(name)


# ---------------------------------------------------------------------------
# Pattern text
# ---------------------------------------------------------------------------


class TestPatternText:
    @pytest.mark.parametrize("path, expected", [
        ("a/b", False),
        ("a/*.conf", True),
        ("a/?", True),
        ("a/\\*", False),
        ("a/\\?b", False),
        ("a/\\**", True),
    ])
    def test_has_wildcard(self, path: str, expected: bool) -> None:
        assert has_wildcard(path) is expected

    def test_unescape(self) -> None:
        assert unescape("x\\*y\\?z") == "x*y?z"

    def test_unescape_leaves_plain_text(self) -> None:
        assert unescape("a/b.conf") == "a/b.conf"

    @pytest.mark.parametrize("component, name, expected", [
        ("*.conf", "kitty.conf", True),
        ("*.conf", "kitty.config", False),
        ("?.txt", "a.txt", True),
        ("?.txt", "ab.txt", False),
        ("a\\*", "a*", True),
        ("a\\*", "ab", False),
        ("file.(1)", "file.(1)", True),
    ])
    def test_compile_component(self, component: str, name: str, expected: bool) -> None:
        assert bool(compile_component(component).fullmatch(name)) is expected


# ---------------------------------------------------------------------------
# Tree matching
# ---------------------------------------------------------------------------


class TestMatchPattern:
    def test_matches_files_sorted(self, tmp_path: Path) -> None:
        make_tree(tmp_path, "conf/b.conf", "conf/a.conf", "conf/notes.txt")
        assert match_pattern("conf/*.conf", tmp_path, LocalFilesystem()) == [
            "conf/a.conf",
            "conf/b.conf",
        ]

    def test_wildcard_directory_component(self, tmp_path: Path) -> None:
        make_tree(tmp_path, "x/init.vim", "y/init.vim", "z/other.vim")
        assert match_pattern("*/init.vim", tmp_path, LocalFilesystem()) == [
            "x/init.vim",
            "y/init.vim",
        ]

    def test_last_component_must_be_file(self, tmp_path: Path) -> None:
        make_tree(tmp_path, "a/dir/file")
        assert match_pattern("a/*", tmp_path, LocalFilesystem()) == []

    def test_intermediate_component_must_be_directory(self, tmp_path: Path) -> None:
        make_tree(tmp_path, "a.conf")
        assert match_pattern("*/x", tmp_path, LocalFilesystem()) == []

    def test_no_match(self, tmp_path: Path) -> None:
        assert match_pattern("*.nothing", tmp_path, LocalFilesystem()) == []

    def test_escaped_wildcard_names_literal_file(self, tmp_path: Path) -> None:
        make_tree(tmp_path, "odd/x*y", "odd/xzy")
        assert match_pattern("o?d/x\\*y", tmp_path, LocalFilesystem()) == ["odd/x*y"]
