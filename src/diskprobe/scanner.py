"""Directory scanning entry points for diskprobe."""

import logging
import os
from pathlib import Path

from diskprobe.aggregator import aggregate, extension_of, file_record
from diskprobe.errors import NotADirectoryScanError, PathNotFoundError
from diskprobe.filesystem import LOCAL_FS, FileSystem, is_directory, is_symlink, last_modified
from diskprobe.models import DirectoryItem, DirectoryListing, FileRecord, ScanResult, TreeNode
from diskprobe.stats import TypeStats, add_file_to_stats, merge_type_stats, reduce_type_stats, select_large_files

logger = logging.getLogger(__name__)

# Files above this size are reported as large files by deep scans
LARGE_FILE_THRESHOLD = 50 * 1024 * 1024

# Depth budget used when sizing children of an expanded node
EXPAND_DEPTH = 10


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def get_home_directory() -> str:
    """Return the current user's home directory."""
    return str(Path.home())


def _resolve_directory(path: str | Path, fs: FileSystem) -> str:
    """
    Validate a root path and return it in absolute form.

    Raises:
        PathNotFoundError: If the path does not exist
        NotADirectoryScanError: If the path is not a directory
    """
    root = os.path.abspath(os.fspath(path))
    try:
        st = fs.metadata(root)
    except OSError:
        raise PathNotFoundError(root) from None
    if not is_directory(st):
        raise NotADirectoryScanError(root)
    return root


def _visible_entries(root: str, fs: FileSystem):
    """Non-hidden, non-symlink entries of a directory; empty if unreadable."""
    try:
        entries = fs.list_entries(root)
    except OSError as e:
        logger.debug("Cannot list %s: %s", root, e)
        return []
    return [e for e in entries if not e.name.startswith(".") and not is_symlink(e.stat)]


def scan_directory_deep(
    path: str | Path,
    max_depth: int = 3,
    top_files_limit: int = 20,
    fs: FileSystem = LOCAL_FS,
) -> ScanResult:
    """
    Scan a directory tree and summarize it.

    Hidden entries directly under ``path`` are ignored; hidden entries
    further down are counted. Directories more than ``max_depth`` levels
    below ``path`` are counted but their contents are not sized.

    Args:
        path: Root directory to scan
        max_depth: Levels to descend for sizing (0 sizes only root files)
        top_files_limit: Maximum number of large files to return

    Returns:
        ScanResult with totals, first-level tree, large files and type stats

    Raises:
        PathNotFoundError: If the path does not exist
        NotADirectoryScanError: If the path is not a directory
        ValueError: If max_depth or top_files_limit is negative
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    if top_files_limit < 0:
        raise ValueError(f"top_files_limit must be non-negative, got {top_files_limit}")

    root = _resolve_directory(path, fs)
    logger.info("Deep scan of %s (max_depth=%d)", root, max_depth)

    total_size = 0
    file_count = 0
    dir_count = 0
    large_files: list[FileRecord] = []
    type_stats: TypeStats = {}
    tree: list[TreeNode] = []

    for entry in _visible_entries(root, fs):
        if is_directory(entry.stat):
            dir_count += 1
            if max_depth > 0:
                sub = aggregate(entry.path, max_depth - 1, LARGE_FILE_THRESHOLD, large_files, fs)
            else:
                sub = None

            node = TreeNode(name=entry.name, path=entry.path, is_directory=True)
            if sub is not None:
                total_size += sub.size
                file_count += sub.file_count
                dir_count += sub.dir_count
                merge_type_stats(type_stats, sub.type_stats)
                node.size = sub.size
                node.file_count = sub.file_count
                node.dir_count = sub.dir_count
            tree.append(node)
        else:
            size = entry.stat.st_size
            total_size += size
            file_count += 1
            add_file_to_stats(type_stats, extension_of(entry.name), size)

            if size > LARGE_FILE_THRESHOLD:
                large_files.append(file_record(entry))

            tree.append(TreeNode(name=entry.name, path=entry.path, size=size))

    tree.sort(key=lambda n: (-n.size, n.name))

    result = ScanResult(
        path=root,
        total_size=total_size,
        file_count=file_count,
        dir_count=dir_count,
        tree=tree,
        large_files=select_large_files(large_files, top_files_limit),
        type_stats=reduce_type_stats(type_stats),
    )
    logger.info(
        "Scanned %s: %d bytes, %d files, %d dirs",
        root,
        total_size,
        file_count,
        dir_count,
    )
    return result


def get_directory_children(path: str | Path, fs: FileSystem = LOCAL_FS) -> list[TreeNode]:
    """
    Size the immediate children of a directory, for expanding a tree node.

    Each child directory is aggregated independently with a depth budget of
    EXPAND_DEPTH. Large files found along the way are discarded.

    Returns:
        Child nodes sorted by size descending

    Raises:
        PathNotFoundError: If the path does not exist
        NotADirectoryScanError: If the path is not a directory
    """
    root = _resolve_directory(path, fs)
    children: list[TreeNode] = []

    for entry in _visible_entries(root, fs):
        if is_directory(entry.stat):
            sub = aggregate(entry.path, EXPAND_DEPTH, LARGE_FILE_THRESHOLD, [], fs)
            children.append(
                TreeNode(
                    name=entry.name,
                    path=entry.path,
                    size=sub.size,
                    is_directory=True,
                    file_count=sub.file_count,
                    dir_count=sub.dir_count,
                )
            )
        else:
            children.append(TreeNode(name=entry.name, path=entry.path, size=entry.stat.st_size))

    children.sort(key=lambda n: (-n.size, n.name))
    return children


def find_large_files(
    path: str | Path,
    limit: int = 50,
    min_size: int = 100 * 1024 * 1024,
    fs: FileSystem = LOCAL_FS,
) -> list[FileRecord]:
    """
    Find files of at least ``min_size`` bytes anywhere under ``path``.

    Unlike deep scans, there is no depth limit and hidden entries are
    searched at every level. Symlinks are skipped.

    Args:
        path: Directory to search
        limit: Maximum number of results
        min_size: Minimum file size in bytes

    Returns:
        Files sorted by size descending

    Raises:
        PathNotFoundError: If the path does not exist
        NotADirectoryScanError: If the path is not a directory
        ValueError: If limit or min_size is negative
    """
    if min_size < 0:
        raise ValueError(f"min_size must be non-negative, got {min_size}")

    root = _resolve_directory(path, fs)
    found: list[FileRecord] = []
    pending = [root]

    while pending:
        dir_path = pending.pop()
        try:
            entries = fs.list_entries(dir_path)
        except OSError as e:
            logger.debug("Cannot list %s: %s", dir_path, e)
            continue

        for entry in entries:
            if is_symlink(entry.stat):
                continue
            if is_directory(entry.stat):
                pending.append(entry.path)
            elif entry.stat.st_size >= min_size:
                found.append(file_record(entry))

    return select_large_files(found, limit)


def scan_directory(path: str | Path, fs: FileSystem = LOCAL_FS) -> DirectoryListing:
    """
    List a directory without recursing.

    Every entry is reported with its own metadata size, hidden entries
    included. Directory sizes are the size of the directory inode, not of
    its contents.

    Raises:
        PathNotFoundError: If the path does not exist
        NotADirectoryScanError: If the path is not a directory
    """
    root = _resolve_directory(path, fs)
    items: list[DirectoryItem] = []
    total = 0

    try:
        entries = fs.list_entries(root)
    except OSError as e:
        logger.debug("Cannot list %s: %s", root, e)
        entries = []

    for entry in entries:
        size = entry.stat.st_size
        total += size
        items.append(
            DirectoryItem(
                name=entry.name,
                path=entry.path,
                size=size,
                is_directory=is_directory(entry.stat),
                last_modified=last_modified(entry.stat),
            )
        )

    items.sort(key=lambda i: (not i.is_directory, i.name.lower()))
    return DirectoryListing(path=root, size=total, items=items)
