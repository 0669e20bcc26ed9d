"""Merging, ordering and truncation of scan statistics."""

from diskprobe.models import ExtensionStat, FileRecord

# extension -> (count, total_size)
TypeStats = dict[str, tuple[int, int]]

TYPE_STATS_LIMIT = 20


def add_file_to_stats(stats: TypeStats, extension: str, size: int) -> None:
    """Fold a single file into its extension bucket."""
    count, total = stats.get(extension, (0, 0))
    stats[extension] = (count + 1, total + size)


def merge_type_stats(into: TypeStats, partial: TypeStats) -> TypeStats:
    """
    Merge a partial extension map into ``into``.

    The merge is a per-key sum, so the order in which partial maps are
    merged never changes the final totals.

    Returns:
        The updated ``into`` map
    """
    for ext, (count, size) in partial.items():
        cur_count, cur_size = into.get(ext, (0, 0))
        into[ext] = (cur_count + count, cur_size + size)
    return into


def reduce_type_stats(stats: TypeStats, limit: int = TYPE_STATS_LIMIT) -> list[ExtensionStat]:
    """
    Convert an extension map to a list sorted by total size, largest first.

    Args:
        stats: Extension map to convert
        limit: Maximum number of entries to keep

    Returns:
        At most ``limit`` ExtensionStat entries
    """
    _check_limit(limit)
    result = [
        ExtensionStat(extension=ext, count=count, total_size=size)
        for ext, (count, size) in stats.items()
    ]
    result.sort(key=lambda s: (-s.total_size, s.extension))
    return result[:limit]


def select_large_files(candidates: list[FileRecord], limit: int) -> list[FileRecord]:
    """
    Pick the largest files from an unordered candidate buffer.

    Args:
        candidates: Files collected during traversal
        limit: Maximum number of files to return (0 returns an empty list)

    Returns:
        Files sorted by size descending, at most ``limit`` long
    """
    _check_limit(limit)
    ordered = sorted(candidates, key=lambda f: (-f.size, f.path))
    return ordered[:limit]


def _check_limit(limit: int) -> None:
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
