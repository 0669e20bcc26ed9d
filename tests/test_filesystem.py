"""Tests for the filesystem accessor."""

import os
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from diskprobe.aggregator import aggregate
from diskprobe.filesystem import LOCAL_FS, is_directory, is_symlink, last_modified


class InterruptedScandir:
    """Yields the given entries, then fails like a directory read error."""

    def __init__(self, entries):
        self._it = iter(entries)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return next(self._it)
        except StopIteration:
            raise OSError(5, "Input/output error") from None


class TestListEntries:
    def test_lists_names_and_paths(self, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "sub").mkdir()

        entries = {e.name: e for e in LOCAL_FS.list_entries(str(tmp_path))}
        assert set(entries) == {"a.txt", "sub"}
        assert entries["a.txt"].path == str(tmp_path / "a.txt")
        assert entries["a.txt"].stat.st_size == 5
        assert is_directory(entries["sub"].stat)

    def test_read_error_keeps_entries_already_read(self, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "b.txt").write_text("world!")
        with os.scandir(tmp_path) as it:
            first = sorted(it, key=lambda e: e.name)[:1]

        with patch("diskprobe.filesystem.os.scandir", return_value=InterruptedScandir(first)):
            entries = LOCAL_FS.list_entries(str(tmp_path))

        assert [e.name for e in entries] == ["a.txt"]
        assert entries[0].stat.st_size == 5

    def test_read_error_still_counted_by_aggregate(self, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "b.txt").write_text("world!")
        with os.scandir(tmp_path) as it:
            first = sorted(it, key=lambda e: e.name)[:1]

        with patch("diskprobe.filesystem.os.scandir", return_value=InterruptedScandir(first)):
            result = aggregate(str(tmp_path), 5, 1000, [])

        assert result.size == 5
        assert result.file_count == 1

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            LOCAL_FS.list_entries(str(tmp_path / "missing"))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_does_not_follow_symlinks(self, tmp_path):
        (tmp_path / "target").mkdir()
        os.symlink(tmp_path / "target", tmp_path / "link", target_is_directory=True)

        entries = {e.name: e for e in LOCAL_FS.list_entries(str(tmp_path))}
        assert is_symlink(entries["link"].stat)
        assert not is_directory(entries["link"].stat)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_broken_symlink_listed(self, tmp_path):
        os.symlink(tmp_path / "nowhere", tmp_path / "dangling")
        entries = LOCAL_FS.list_entries(str(tmp_path))
        assert [e.name for e in entries] == ["dangling"]
        assert is_symlink(entries[0].stat)


class TestMetadata:
    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlink_metadata_vs_metadata(self, tmp_path):
        (tmp_path / "target").mkdir()
        link = tmp_path / "link"
        os.symlink(tmp_path / "target", link, target_is_directory=True)

        assert is_symlink(LOCAL_FS.symlink_metadata(str(link)))
        assert is_directory(LOCAL_FS.metadata(str(link)))


class TestLastModified:
    def test_real_file(self, tmp_path):
        f = tmp_path / "f"
        f.write_text("x")
        os.utime(f, (1_600_000_000, 1_600_000_000))
        assert last_modified(os.stat(f)) == 1_600_000_000

    def test_unavailable(self):
        assert last_modified(SimpleNamespace()) == 0

    def test_before_epoch(self):
        assert last_modified(SimpleNamespace(st_mtime=-5.0)) == 0
