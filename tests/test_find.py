"""Tests for the find-files primitive."""

import errno
import os
import sys

import pytest

from phylo.exceptions import EnumerationOpenError
from phylo.services.find import find_files, has_wildcards


def names(handle):
    with handle:
        return sorted(entry.name for entry in handle)


class TestHasWildcards:
    """Test wildcard detection."""

    @pytest.mark.parametrize("segment", ["*", "*.txt", "file?.log", "[ab]*.py"])
    def test_wildcards(self, segment):
        assert has_wildcards(segment)

    def test_literal(self):
        assert not has_wildcards("notes.txt")

    def test_brackets_are_literal(self):
        assert not has_wildcards("a[1].txt")


class TestFindFiles:
    """Test opening and iterating find handles."""

    def test_star_includes_pseudo_entries(self, populated_dir):
        handle = find_files(str(populated_dir / "*"))
        assert names(handle) == [".", "..", "a.txt", "sub"]

    def test_segment_filter(self, populated_dir):
        (populated_dir / "b.log").write_text("x")
        handle = find_files(str(populated_dir / "*.txt"))
        assert names(handle) == ["a.txt"]

    def test_empty_directory_opens(self, tmp_path):
        handle = find_files(str(tmp_path / "*"))
        assert names(handle) == [".", ".."]

    def test_literal_file(self, populated_dir):
        with find_files(str(populated_dir / "a.txt")) as handle:
            entries = list(handle)

        assert len(entries) == 1
        assert entries[0].name == "a.txt"
        assert entries[0].size == 5

    def test_literal_directory_is_single_entry(self, populated_dir):
        (populated_dir / "sub" / "inner.txt").write_text("x")

        with find_files(str(populated_dir / "sub")) as handle:
            entries = list(handle)

        assert [e.name for e in entries] == ["sub"]
        assert entries[0].is_directory

    def test_literal_name_with_brackets(self, populated_dir):
        (populated_dir / "a[1].txt").write_text("x")

        with find_files(str(populated_dir / "a[1].txt")) as handle:
            assert [e.name for e in handle] == ["a[1].txt"]

    def test_brackets_match_literally_with_wildcards(self, populated_dir):
        (populated_dir / "a[1].txt").write_text("x")
        (populated_dir / "a1.txt").write_text("x")

        assert names(find_files(str(populated_dir / "a[1]*"))) == ["a[1].txt"]

    def test_relative_pattern(self, populated_dir, monkeypatch):
        monkeypatch.chdir(populated_dir)
        assert names(find_files("*.txt")) == ["a.txt"]

    def test_no_match_fails_to_open(self, populated_dir):
        with pytest.raises(EnumerationOpenError) as exc_info:
            find_files(str(populated_dir / "*.nothing"))

        assert exc_info.value.error_code == errno.ENOENT

    def test_missing_directory(self, tmp_path):
        pattern = str(tmp_path / "missing" / "*")
        with pytest.raises(EnumerationOpenError) as exc_info:
            find_files(pattern)

        assert exc_info.value.pattern == pattern
        assert exc_info.value.exit_code == 2

    def test_missing_literal(self, tmp_path):
        with pytest.raises(EnumerationOpenError):
            find_files(str(tmp_path / "missing.txt"))

    def test_trailing_separator(self, populated_dir):
        with pytest.raises(EnumerationOpenError):
            find_files(str(populated_dir) + os.sep)

    def test_handle_closed_after_with(self, populated_dir):
        with find_files(str(populated_dir / "*")) as handle:
            next(iter(handle))

        assert handle.closed

    def test_close_is_idempotent(self, populated_dir):
        handle = find_files(str(populated_dir / "*"))
        handle.close()
        handle.close()
        assert handle.closed

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlink_not_followed(self, populated_dir):
        os.symlink(populated_dir / "sub", populated_dir / "link")

        with find_files(str(populated_dir / "link")) as handle:
            entry = next(iter(handle))

        assert not entry.is_directory
