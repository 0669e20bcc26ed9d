"""Filesystem access used by the scanners.

Everything that touches the disk goes through a ``FileSystem`` instance so
the traversal code can be exercised against a fake in tests.
"""

import logging
import os
import stat as statmod
from typing import NamedTuple

logger = logging.getLogger(__name__)


class Entry(NamedTuple):
    """A directory entry with metadata read without following symlinks."""

    name: str
    path: str
    stat: os.stat_result


class FileSystem:
    """Thin synchronous wrapper over ``os`` directory and metadata calls."""

    def list_entries(self, path: str) -> list[Entry]:
        """
        List entries of a directory.

        Entries whose metadata cannot be read are dropped individually. If
        reading stops partway, the entries read so far are returned.

        Raises:
            OSError: If the directory itself cannot be opened
        """
        entries: list[Entry] = []
        with os.scandir(path) as it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as e:
                    logger.debug("Listing of %s stopped early: %s", path, e)
                    break

                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError as e:
                    logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
                    continue
                entries.append(Entry(entry.name, entry.path, st))
        return entries

    def symlink_metadata(self, path: str) -> os.stat_result:
        """Metadata of ``path`` itself, never dereferencing a symlink."""
        return os.lstat(path)

    def metadata(self, path: str) -> os.stat_result:
        """Metadata of ``path``, following symlinks."""
        return os.stat(path)


LOCAL_FS = FileSystem()


def is_symlink(st: os.stat_result) -> bool:
    return statmod.S_ISLNK(st.st_mode)


def is_directory(st: os.stat_result) -> bool:
    return statmod.S_ISDIR(st.st_mode)


def last_modified(st: os.stat_result) -> int:
    """Modification time in whole seconds since the epoch, 0 if unavailable."""
    mtime = getattr(st, "st_mtime", 0) or 0
    return int(mtime) if mtime > 0 else 0
