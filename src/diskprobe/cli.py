"""CLI interface for diskprobe."""

import json
import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from diskprobe import __version__
from diskprobe.config import load_settings, update_setting
from diskprobe.display import (
    console,
    format_size,
    show_children,
    show_large_files,
    show_listing,
    show_scan_result,
    show_scanning_progress,
    show_settings,
)
from diskprobe.errors import ScanError
from diskprobe.scanner import (
    LARGE_FILE_THRESHOLD,
    expand_path,
    find_large_files,
    get_directory_children,
    get_home_directory,
    scan_directory,
    scan_directory_deep,
)

# Sizes are shown and entered in decimal units, like macOS
MB = 1000**2

app = typer.Typer(
    name="diskprobe",
    help="Directory size analyzer - find what is eating your disk",
    add_completion=False,
    no_args_is_help=True,
)


def setup_logging(verbose: bool) -> None:
    """Route diskprobe logs through rich on stderr."""
    logger = logging.getLogger("diskprobe")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"diskprobe version {__version__}")
        raise typer.Exit()


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
) -> None:
    """diskprobe - directory size analyzer."""
    setup_logging(verbose)


@app.command()
def scan(
    path: str = typer.Argument(".", help="Directory to scan"),
    depth: Optional[int] = typer.Option(
        None,
        "--depth",
        "-d",
        min=0,
        help="Levels to descend for sizing. Contents below this depth are not counted in sizes.",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-t",
        min=0,
        help=f"Number of large files (over {format_size(LARGE_FILE_THRESHOLD)}) to show",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Scan a directory tree: sizes of its children, largest files and file types."""
    settings = load_settings()
    max_depth = settings.max_depth if depth is None else depth
    top_files = settings.top_files_limit if top is None else top
    target = expand_path(path)

    try:
        if as_json:
            result = scan_directory_deep(target, max_depth, top_files)
        else:
            with show_scanning_progress() as progress:
                progress.add_task(f"Scanning {target}...", total=None)
                result = scan_directory_deep(target, max_depth, top_files)
    except ScanError as e:
        _fail(str(e))

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    show_scan_result(result)
    if result.dir_count and max_depth < 10:
        console.print(
            f"\n[dim]Sizes include contents up to {max_depth} levels deep. "
            "Use [bold]--depth[/bold] for a more complete total.[/dim]"
        )


@app.command()
def children(
    path: str = typer.Argument(".", help="Directory to expand"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Show the immediate children of a directory with their full sizes."""
    target = expand_path(path)
    try:
        nodes = get_directory_children(target)
    except ScanError as e:
        _fail(str(e))

    if as_json:
        typer.echo(json.dumps([n.model_dump() for n in nodes], indent=2))
        return

    show_children(str(target), nodes)


@app.command()
def large(
    path: str = typer.Argument("~", help="Directory to search"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Maximum number of results"),
    min_size_mb: Optional[int] = typer.Option(None, "--min-size-mb", "-m", min=0, help="Minimum file size in MB (1 MB = 1,000,000 bytes)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Find large files anywhere under a directory."""
    settings = load_settings()
    max_results = settings.large_files_limit if limit is None else limit
    min_mb = settings.large_files_min_size_mb if min_size_mb is None else min_size_mb
    target = expand_path(path)

    try:
        files = find_large_files(target, max_results, min_mb * MB)
    except ScanError as e:
        _fail(str(e))

    if as_json:
        typer.echo(json.dumps([f.model_dump() for f in files], indent=2))
        return

    show_large_files(files, title=f"Files of {min_mb} MB or more in {target}")


@app.command(name="ls")
def list_directory(
    path: str = typer.Argument(".", help="Directory to list"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """List a directory without recursing."""
    try:
        listing = scan_directory(expand_path(path))
    except ScanError as e:
        _fail(str(e))

    if as_json:
        typer.echo(listing.model_dump_json(indent=2))
        return

    show_listing(listing)


@app.command()
def home() -> None:
    """Print the home directory."""
    typer.echo(get_home_directory())


@app.command()
def config(
    key: Optional[str] = typer.Argument(None, help="Setting to change"),
    value: Optional[str] = typer.Argument(None, help="New value"),
) -> None:
    """Show settings, or change one with KEY VALUE."""
    if key is None:
        show_settings(load_settings())
        return

    if value is None:
        _fail("Specify a value, e.g. diskprobe config max_depth 5")

    try:
        settings = update_setting(key, value)
    except KeyError:
        _fail(f"Unknown setting: {key}")
    except ValidationError:
        _fail(f"Invalid value for {key}: {value}")

    console.print(f"[green]✓[/green] {key} = {getattr(settings, key)}")


if __name__ == "__main__":
    app()
