"""Inspect or wipe a persisted virtual workspace."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.tree import Tree

from actionkit.cli.logging_setup import configure_cli_logging
from actionkit.drivers.files.files_store import FilesStore
from actionkit.drivers.storage.json_file import JsonFileKeyValueStore
from actionkit.kernel.config.loader import load_config
from actionkit.kernel.domain.files import File

app = typer.Typer()
console = Console()

_STORAGE_DIR_OPTION = typer.Option(
    Path("./.actionkit"), "--storage-dir", "-s", help="Directory holding the persisted workspace"
)
_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Config file path")


async def _open_store(
    ctx: typer.Context | None, storage_dir: Path, config_path: Path | None
) -> FilesStore:
    config = load_config(config_path)
    configure_cli_logging(ctx, config.logging)
    store = FilesStore(
        storage=JsonFileKeyValueStore(storage_dir, create_dirs=False), config=config.files
    )
    await store.asetup()
    return store


def build_tree(store: FilesStore) -> Tree:
    """Render the store's entries as a rich tree rooted at ``/``."""
    root = Tree("[bold]/[/bold]")
    nodes: dict[str, Tree] = {"": root}

    for path in sorted(store.files.get()):
        parent, _, name = path.rpartition("/")
        entry = store.files.get_key(path)
        parent_node = nodes.get(parent, root)
        if isinstance(entry, File):
            parent_node.add(f"{name} [dim]({len(entry.content)} chars)[/dim]")
        else:
            nodes[path] = parent_node.add(f"[bold blue]{name}/[/bold blue]")
    return root


@app.command("list")
def list_files(
    ctx: typer.Context,
    storage_dir: Path = _STORAGE_DIR_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
) -> None:
    """Show the persisted file tree."""
    if not storage_dir.exists():
        console.print(f"[yellow]No workspace stored in {storage_dir}[/yellow]")
        raise typer.Exit(0)

    store = asyncio.run(_open_store(ctx, storage_dir, config_path))
    console.print(build_tree(store))
    console.print(f"[bold]Files:[/bold] {store.files_count}")


@app.command("show")
def show_file(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Workspace path of the file"),
    storage_dir: Path = _STORAGE_DIR_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
) -> None:
    """Print the content of one persisted file."""
    store = asyncio.run(_open_store(ctx, storage_dir, config_path))
    content = store.read_file(path)
    if content is None:
        console.print(f"[red]Error:[/red] No file at {store.normalize_path(path)}")
        raise typer.Exit(1)
    console.print(content, markup=False, highlight=False, end="")


@app.command("clear")
def clear_files(
    ctx: typer.Context,
    storage_dir: Path = _STORAGE_DIR_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Remove every persisted file and folder."""
    if not storage_dir.exists():
        console.print(f"[yellow]No workspace stored in {storage_dir}[/yellow]")
        raise typer.Exit(0)

    if not yes and not typer.confirm(f"Clear the workspace stored in {storage_dir}?"):
        raise typer.Abort()

    async def _clear() -> None:
        store = await _open_store(ctx, storage_dir, config_path)
        await store.aclear_files()

    asyncio.run(_clear())
    console.print("[green]Workspace cleared[/green]")
