"""Depth-bounded size aggregation of a directory subtree.

The aggregator walks everything beneath a directory and returns its total
size, file and directory counts and per-extension statistics, while
appending every file above a size threshold to a caller-owned buffer.

Symlinks are never followed or counted. Unreadable directories and entries
contribute nothing and the walk carries on with their siblings.
"""

import logging
from typing import NamedTuple

from diskprobe.filesystem import LOCAL_FS, Entry, FileSystem, is_directory, is_symlink, last_modified
from diskprobe.models import FileRecord
from diskprobe.stats import TypeStats, add_file_to_stats

logger = logging.getLogger(__name__)

# Bucket for files without an extension
OTHER_EXTENSION = "other"


class Aggregate(NamedTuple):
    """Totals for everything beneath one directory."""

    size: int
    file_count: int
    dir_count: int
    type_stats: TypeStats


def extension_of(name: str) -> str:
    """
    Lowercased extension of a file name.

    A leading dot does not start an extension, so ``.bashrc`` goes to the
    ``other`` bucket. A trailing dot gives an empty extension (``archive.``
    -> ``""``), which is its own bucket.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem or name == "..":
        return OTHER_EXTENSION
    return ext.lower()


def file_record(entry: Entry) -> FileRecord:
    """Build a FileRecord from an already-read directory entry."""
    return FileRecord(
        name=entry.name,
        path=entry.path,
        size=entry.stat.st_size,
        last_modified=last_modified(entry.stat),
    )


def aggregate(
    path: str,
    depth_budget: int,
    large_file_threshold: int,
    large_files: list[FileRecord],
    fs: FileSystem = LOCAL_FS,
) -> Aggregate:
    """
    Aggregate size and counts for everything beneath ``path``.

    Directories reached with a depth budget of 0 are counted in
    ``dir_count`` but not listed, so their contents add nothing to the
    size. Pass a large budget when exact totals are needed.

    Args:
        path: Directory to aggregate
        depth_budget: Levels below ``path`` that may still be descended into
        large_file_threshold: Files strictly larger than this are appended
            to ``large_files``
        large_files: Buffer receiving large-file candidates
        fs: Filesystem accessor

    Returns:
        Aggregate(size, file_count, dir_count, type_stats)
    """
    size = 0
    file_count = 0
    dir_count = 0
    type_stats: TypeStats = {}

    # Sums are order-independent, so a flat work stack gives the same
    # totals as recursion without growing the interpreter stack.
    pending: list[tuple[str, int]] = [(path, depth_budget)]

    while pending:
        dir_path, budget = pending.pop()
        try:
            entries = fs.list_entries(dir_path)
        except OSError as e:
            logger.debug("Cannot list %s, treating as empty: %s", dir_path, e)
            continue

        for entry in entries:
            st = entry.stat

            # Must be checked before the directory branch
            if is_symlink(st):
                continue

            if is_directory(st):
                dir_count += 1
                if budget > 0:
                    pending.append((entry.path, budget - 1))
                continue

            file_size = st.st_size
            size += file_size
            file_count += 1
            add_file_to_stats(type_stats, extension_of(entry.name), file_size)

            if file_size > large_file_threshold:
                large_files.append(file_record(entry))

    return Aggregate(size, file_count, dir_count, type_stats)
