"""Tests for pagemap.routing.scanner: page file enumeration."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagemap._errors import EnumerationError
from pagemap.cancellation import CancellationToken
from pagemap.routing.scanner import (
    DEFAULT_PATTERN,
    ScannedFile,
    collect_scanned_files,
    enumerate_page_files,
    expand_braces,
)

from .conftest import write_pages


class TestExpandBraces:
    def test_no_braces(self) -> None:
        assert expand_braces("**/*.vue") == ["**/*.vue"]

    def test_alternatives(self) -> None:
        assert expand_braces("**/*.{vue,ts}") == ["**/*.vue", "**/*.ts"]

    def test_default_pattern(self) -> None:
        assert expand_braces(DEFAULT_PATTERN) == [
            "**/*.vue", "**/*.js", "**/*.ts", "**/*.jsx", "**/*.tsx",
        ]

    def test_multiple_groups(self) -> None:
        assert expand_braces("{a,b}/*.{x,y}") == ["a/*.x", "a/*.y", "b/*.x", "b/*.y"]


class TestEnumeratePageFiles:
    """Filesystem enumeration with hidden-file and extension filtering."""

    def test_finds_nested_files(self, pages_dir: Path) -> None:
        write_pages(pages_dir, ["index.vue", "users/[id].vue", "users/index.vue"])
        assert enumerate_page_files(pages_dir) == [
            "index.vue", "users/[id].vue", "users/index.vue",
        ]

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert enumerate_page_files(tmp_path / "nope") == []

    def test_empty_directory(self, pages_dir: Path) -> None:
        assert enumerate_page_files(pages_dir) == []

    def test_other_extensions_ignored(self, pages_dir: Path) -> None:
        write_pages(pages_dir, ["about.vue", "notes.md", "style.css", "api.ts"])
        assert enumerate_page_files(pages_dir) == ["about.vue", "api.ts"]

    def test_hidden_files_ignored(self, pages_dir: Path) -> None:
        write_pages(pages_dir, [".draft.vue", ".cache/page.vue", "ok.vue"])
        assert enumerate_page_files(pages_dir) == ["ok.vue"]

    def test_directories_matching_pattern_ignored(self, pages_dir: Path) -> None:
        (pages_dir / "odd.vue").mkdir()
        write_pages(pages_dir, ["odd.vue/inner.vue"])
        assert enumerate_page_files(pages_dir) == ["odd.vue/inner.vue"]

    def test_custom_pattern(self, pages_dir: Path) -> None:
        write_pages(pages_dir, ["a.vue", "b.ts"])
        assert enumerate_page_files(pages_dir, "**/*.ts") == ["b.ts"]

    def test_accepts_str(self, pages_dir: Path) -> None:
        write_pages(pages_dir, ["a.vue"])
        assert enumerate_page_files(str(pages_dir)) == ["a.vue"]

    def test_os_error_wrapped(self, pages_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken_glob(self: Path, pattern: str):
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "glob", broken_glob)
        with pytest.raises(EnumerationError, match="denied"):
            enumerate_page_files(pages_dir)


class TestCollectScannedFiles:
    """Sorting, de-duplication and absolute paths."""

    def test_absolute_paths(self, pages_dir: Path) -> None:
        (scanned,) = collect_scanned_files(pages_dir, ["users/[id].vue"])
        assert scanned == ScannedFile(
            relative_path="users/[id].vue",
            absolute_path=str(pages_dir / "users/[id].vue"),
        )

    def test_case_insensitive_order(self) -> None:
        files = collect_scanned_files("/p", ["b.vue", "A.vue", "a.vue", "C.vue"])
        assert [f.relative_path for f in files] == ["a.vue", "A.vue", "b.vue", "C.vue"]

    def test_punctuation_before_digits_before_letters(self) -> None:
        files = collect_scanned_files("/p", ["1234.vue", "abcd.vue", "[ab].vue", "_abc.vue"])
        assert [f.relative_path for f in files] == [
            "_abc.vue", "[ab].vue", "1234.vue", "abcd.vue",
        ]

    def test_separator_sorts_after_dash(self) -> None:
        files = collect_scanned_files("/p", ["foo/bar.vue", "foo-bar.vue"])
        assert [f.relative_path for f in files] == ["foo-bar.vue", "foo/bar.vue"]

    def test_duplicates_removed(self) -> None:
        files = collect_scanned_files("/p", ["a.vue", "b.vue", "a.vue"])
        assert [f.relative_path for f in files] == ["a.vue", "b.vue"]

    def test_order_independent_of_input(self) -> None:
        first = collect_scanned_files("/p", ["z/a.vue", "a.vue", "m.vue"])
        second = collect_scanned_files("/p", ["m.vue", "z/a.vue", "a.vue"])
        assert first == second

    def test_cancelled_stops_early(self, pages_dir: Path) -> None:
        write_pages(pages_dir, ["a.vue", "b.vue"])
        token = CancellationToken()
        token.cancel()
        assert enumerate_page_files(pages_dir, token=token) == []
