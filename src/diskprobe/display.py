"""Rich terminal display for diskprobe."""

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from diskprobe.config import Settings
from diskprobe.models import DirectoryListing, FileRecord, ScanResult, TreeNode, human_size

console = Console()


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (decimal units like macOS)."""
    return human_size(size_bytes)


def format_timestamp(ts: int) -> str:
    """Format a unix timestamp as a local date, or '-' if unknown."""
    if ts <= 0:
        return "-"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def share_bar(size: int, total: int, width: int = 20) -> str:
    """Bar showing what fraction of ``total`` a size takes up."""
    fraction = size / total if total > 0 else 0
    filled = int(round(width * fraction))
    return f"[cyan]{'█' * filled}[/cyan][dim]{'░' * (width - filled)}[/dim] {fraction * 100:4.1f}%"


def _tree_table(nodes: list[TreeNode], total: int, title: str | None = None) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Share")
    table.add_column("Files", justify="right")
    table.add_column("Dirs", justify="right")

    for node in nodes:
        name = f"[bold blue]{node.name}/[/bold blue]" if node.is_directory else node.name
        table.add_row(
            name,
            node.size_human,
            share_bar(node.size, total),
            str(node.file_count) if node.is_directory else "",
            str(node.dir_count) if node.is_directory else "",
        )
    return table


def show_large_files(files: list[FileRecord], title: str = "Largest Files") -> None:
    """Display a list of large files."""
    if not files:
        console.print("[dim]No large files found.[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Size", justify="right", style="yellow")
    table.add_column("Modified")
    table.add_column("Path")

    for f in files:
        table.add_row(f.size_human, format_timestamp(f.last_modified), f.path)

    console.print(table)


def show_scan_result(result: ScanResult) -> None:
    """Display a full deep-scan result."""
    console.print(
        Panel(
            f"[bold]{result.path}[/bold]\n"
            f"Total size: [bold]{result.size_human}[/bold]\n"
            f"Files: {result.file_count}  Directories: {result.dir_count}\n"
            f"Top level: {len(result.directories)} directories, {len(result.files)} files",
            title="Scan Summary",
            border_style="blue",
        )
    )

    if result.tree:
        console.print(_tree_table(result.tree, result.total_size, title="Contents"))
        console.print()

    show_large_files(result.large_files)
    console.print()

    if result.type_stats:
        table = Table(title="By File Type", show_header=True, header_style="bold")
        table.add_column("Extension")
        table.add_column("Files", justify="right")
        table.add_column("Size", justify="right")
        table.add_column("Share")
        for stat in result.type_stats:
            table.add_row(
                stat.extension or "(empty)",
                str(stat.count),
                stat.size_human,
                share_bar(stat.total_size, result.total_size),
            )
        console.print(table)


def show_children(path: str, children: list[TreeNode]) -> None:
    """Display the sized children of one directory."""
    if not children:
        console.print(f"[dim]{path} has no visible entries.[/dim]")
        return

    total = sum(c.size for c in children)
    console.print(_tree_table(children, total, title=path))
    console.print(f"[bold]Total: {format_size(total)}[/bold]")


def show_listing(listing: DirectoryListing) -> None:
    """Display a flat directory listing."""
    table = Table(title=listing.path, show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified")

    for item in listing.items:
        name = f"[bold blue]{item.name}/[/bold blue]" if item.is_directory else item.name
        table.add_row(name, item.size_human, format_timestamp(item.last_modified))

    console.print(table)
    console.print(f"{len(listing.items)} entries, {listing.size_human}")


def show_settings(settings: Settings) -> None:
    """Display current settings."""
    table = Table(title="Settings", show_header=True, header_style="bold")
    table.add_column("Key", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Description", style="dim")

    for key, field in Settings.model_fields.items():
        table.add_row(key, str(getattr(settings, key)), field.description or "")

    console.print(table)


def show_scanning_progress() -> Progress:
    """Create spinner for a scan of unknown length."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
