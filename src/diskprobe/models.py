"""Data models for diskprobe."""

from pydantic import BaseModel, Field


def human_size(size_bytes: int) -> str:
    """Human-readable size string (decimal units like macOS)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


class FileRecord(BaseModel):
    """A single file, as reported in large-file lists."""

    name: str = Field(..., description="File name")
    path: str = Field(..., description="Absolute path")
    size: int = Field(..., description="Size in bytes")
    last_modified: int = Field(0, description="Modification time (unix seconds), 0 if unavailable")

    @property
    def size_human(self) -> str:
        return human_size(self.size)


class TreeNode(BaseModel):
    """A file or directory in the first-level tree."""

    name: str = Field(..., description="Path segment")
    path: str = Field(..., description="Absolute path")
    size: int = Field(0, description="Size in bytes; recursive total for directories")
    is_directory: bool = Field(False, description="Whether this node is a directory")
    children: list["TreeNode"] = Field(default_factory=list, description="Materialized children")
    file_count: int = Field(0, description="Files beneath this node")
    dir_count: int = Field(0, description="Directories beneath this node")

    @property
    def size_human(self) -> str:
        return human_size(self.size)


class ExtensionStat(BaseModel):
    """Aggregate statistics for one file extension."""

    extension: str = Field(..., description="Lowercased extension, or 'other'")
    count: int = Field(0, description="Number of files")
    total_size: int = Field(0, description="Total bytes")

    @property
    def size_human(self) -> str:
        return human_size(self.total_size)


class ScanResult(BaseModel):
    """Result of a deep directory scan."""

    path: str = Field(..., description="Path that was scanned")
    total_size: int = Field(0, description="Total size in bytes")
    file_count: int = Field(0, description="Number of files")
    dir_count: int = Field(0, description="Number of directories")
    tree: list[TreeNode] = Field(default_factory=list, description="Immediate children, largest first")
    large_files: list[FileRecord] = Field(default_factory=list, description="Largest files, largest first")
    type_stats: list[ExtensionStat] = Field(default_factory=list, description="Per-extension totals")

    @property
    def size_human(self) -> str:
        return human_size(self.total_size)

    @property
    def directories(self) -> list[TreeNode]:
        """First-level directory nodes."""
        return [n for n in self.tree if n.is_directory]

    @property
    def files(self) -> list[TreeNode]:
        """First-level file nodes."""
        return [n for n in self.tree if not n.is_directory]


class DirectoryItem(BaseModel):
    """One entry of a flat directory listing."""

    name: str = Field(..., description="Entry name")
    path: str = Field(..., description="Absolute path")
    size: int = Field(0, description="Size of the entry itself in bytes")
    is_directory: bool = Field(False, description="Whether the entry is a directory")
    last_modified: int = Field(0, description="Modification time (unix seconds)")

    @property
    def size_human(self) -> str:
        return human_size(self.size)


class DirectoryListing(BaseModel):
    """Flat, non-recursive listing of a directory."""

    path: str = Field(..., description="Path that was listed")
    size: int = Field(0, description="Sum of the entries' own sizes")
    items: list[DirectoryItem] = Field(default_factory=list)

    @property
    def size_human(self) -> str:
        return human_size(self.size)
