"""
CLI for runtime-files.

Lists modules, segments and assets beneath a root and shows individual
files, using the same file managers the runtime uses.
"""

import asyncio
import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from runtime_files.filesystem.base import FileManager
from runtime_files.filesystem.classification import classify as classify_filename
from runtime_files.filesystem.config import FileManagerConfig, StorageType
from runtime_files.filesystem.exceptions import FileManagerError
from runtime_files.filesystem.factory import get_file_manager, list_storage_types

# Load environment variables
load_dotenv()

console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup rich logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, rich_tracebacks=True)],
    )


def load_config(
    config_path: Optional[str],
    root: Optional[str],
    storage: Optional[str],
) -> FileManagerConfig:
    """
    Build the configuration from a file or the environment.

    Command line options override both.
    """
    if config_path:
        config = FileManagerConfig.from_file(config_path)
    else:
        config = FileManagerConfig.from_env()

    overrides = {}
    if root is not None:
        overrides["root"] = root
    if storage is not None:
        overrides["storage"] = StorageType(storage)

    if overrides:
        config = config.model_copy(update=overrides)

    return config


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--root",
    "-r",
    default=None,
    help="Root location of the file tree (default: current directory)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to a YAML or JSON configuration file",
)
@click.option(
    "--storage",
    "-s",
    type=click.Choice(list_storage_types()),
    default=None,
    help="Storage type",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.pass_context
def cli(
    ctx: click.Context,
    root: Optional[str],
    config_path: Optional[str],
    storage: Optional[str],
    verbose: bool,
):
    """Runtime Files CLI - inspect module, segment and asset files."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path, root, storage)


def _run(ctx: click.Context, operation):
    """Run an async operation against a fresh file manager."""
    config: FileManagerConfig = ctx.obj["config"]

    async def runner():
        async with get_file_manager(config) as manager:
            return await operation(manager)

    try:
        return asyncio.run(runner())
    except FileManagerError as e:
        error_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


def _print_locations(manager: FileManager, locations: list[str], title: str) -> None:
    table = Table(title=title)
    table.add_column("File", style="cyan")
    table.add_column("Category", style="green")

    for location in sorted(locations):
        filename = manager.get_relative_location(location)
        table.add_row(filename, manager.classify(filename).value)

    console.print(table)


@cli.command()
@click.pass_context
def modules(ctx: click.Context):
    """
    List module files.

    Examples:

        runtime-files -r ./dist modules
    """

    async def operation(manager: FileManager):
        locations = await manager.get_module_file_names()
        _print_locations(manager, locations, "Modules")

    _run(ctx, operation)


@cli.command()
@click.option(
    "--kind",
    "-k",
    type=click.Choice(["config", "node", "repository"]),
    default="config",
    help="Segment files to list",
)
@click.pass_context
def segments(ctx: click.Context, kind: str):
    """
    List segment files.

    Examples:

        runtime-files segments

        runtime-files segments --kind node
    """

    async def operation(manager: FileManager):
        if kind == "node":
            locations = await manager.get_node_segment_files()
        elif kind == "repository":
            locations = await manager.get_repository_segment_files()
        else:
            locations = await manager.get_segment_files()
        _print_locations(manager, locations, f"Segments ({kind})")

    _run(ctx, operation)


@cli.command()
@click.argument("patterns", nargs=-1)
@click.pass_context
def assets(ctx: click.Context, patterns: tuple[str, ...]):
    """
    List hand-authored asset files matching glob patterns.

    Falls back to the configured asset patterns when none are given.

    Examples:

        runtime-files assets "**/*.css" "**/*.png"
    """
    config: FileManagerConfig = ctx.obj["config"]
    selected = list(patterns) or config.asset_patterns

    if not selected:
        error_console.print("[yellow]No asset patterns given or configured.[/yellow]")
        sys.exit(1)

    async def operation(manager: FileManager):
        filenames = await manager.get_asset_files(selected)
        for filename in filenames:
            console.print(filename)

    _run(ctx, operation)


@cli.command()
@click.argument("filename")
@click.pass_context
def info(ctx: click.Context, filename: str):
    """
    Show where a file resolves to and what it is.

    Examples:

        runtime-files info shared/config.segment.json
    """

    async def operation(manager: FileManager):
        file = await manager.load(filename)

        table = Table(show_header=False)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        table.add_row("Filename", file.filename)
        table.add_row("Location", manager.get_absolute_location(filename))
        table.add_row("Content type", file.type)
        table.add_row("Size", f"{file.size} bytes")
        table.add_row("Category", manager.classify(filename).value)
        console.print(table)

    _run(ctx, operation)


@cli.command()
@click.argument("filename")
@click.pass_context
def cat(ctx: click.Context, filename: str):
    """
    Print the content of a file.

    Examples:

        runtime-files cat index.js
    """

    async def operation(manager: FileManager):
        content = await manager.get_content(filename)
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()

    _run(ctx, operation)


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def classify(ctx: click.Context, names: tuple[str, ...]):
    """
    Classify filenames by naming convention (no file access).

    Examples:

        runtime-files classify app.segment.local.js logo.local.png
    """
    config: FileManagerConfig = ctx.obj["config"]

    for name in names:
        category = classify_filename(
            name, config.module_extension, config.config_extension
        )
        click.echo(f"{name}\t{category.value}")


def main() -> None:
    """Entry point for the runtime-files command."""
    cli(obj={})


if __name__ == "__main__":
    main()
