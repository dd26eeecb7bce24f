"""Replay a file of action records through the execution engine."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer
import yaml
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from actionkit.cli.logging_setup import configure_cli_logging
from actionkit.drivers.files.files_store import FilesStore
from actionkit.drivers.storage.json_file import JsonFileKeyValueStore
from actionkit.kernel.config.loader import load_config
from actionkit.kernel.domain.actions import (
    Action,
    ActionCallbackData,
    ActionState,
    ActionStatus,
    ActionType,
    FileAction,
)
from actionkit.kernel.exceptions import ConfigurationError
from actionkit.kernel.orchestration.action_runner import ActionRunner

if TYPE_CHECKING:
    from actionkit.kernel.config.models import ActionKitConfig

console = Console()

_ACTION_ADAPTER: TypeAdapter[Any] = TypeAdapter(Action)

_STATUS_STYLES = {
    ActionStatus.COMPLETE: "green",
    ActionStatus.ABORTED: "yellow",
    ActionStatus.FAILED: "red",
    ActionStatus.RUNNING: "cyan",
    ActionStatus.PENDING: "dim",
}


def load_action_records(path: Path) -> list[ActionCallbackData]:
    """Parse a YAML/JSON list of action records.

    Accepts either a top-level list or a mapping with an ``actions`` list.
    Each record needs ``id`` and ``type``; ``content`` and ``file_path``
    follow the action type.

    Raises
    ------
    ConfigurationError
        If the document or a record is malformed
    """
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get("actions")
    if not isinstance(data, list):
        raise ConfigurationError(str(path), "expected a list of actions or an 'actions' list")

    records: list[ActionCallbackData] = []
    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            raise ConfigurationError(str(path), f"action #{index} must be a mapping")
        fields = dict(raw)
        raw_id = fields.pop("id", None)
        alias_id = fields.pop("action_id", None)
        action_id = str(raw_id or alias_id or "")
        try:
            action = _ACTION_ADAPTER.validate_python(fields)
            records.append(ActionCallbackData(action_id=action_id, action=action))
        except PydanticValidationError as e:
            raise ConfigurationError(str(path), f"action #{index} is invalid: {e}") from e
    return records


def stream_chunks(data: ActionCallbackData, chunk_size: int) -> list[ActionCallbackData]:
    """Split a file action into growing partial records, as a streaming producer would."""
    action = data.action
    if not isinstance(action, FileAction) or chunk_size <= 0:
        return []
    partials = []
    for end in range(chunk_size, len(action.content), chunk_size):
        partial = action.model_copy(update={"content": action.content[:end]})
        partials.append(data.model_copy(update={"action": partial}))
    return partials


async def apply_actions(
    records: list[ActionCallbackData],
    *,
    config: ActionKitConfig,
    storage_dir: Path | None = None,
    chunk_size: int = 0,
) -> tuple[ActionRunner, FilesStore]:
    """Register, stream and finalize every record in order."""
    storage = JsonFileKeyValueStore(storage_dir) if storage_dir else None
    files_store = FilesStore(storage=storage, config=config.files)
    await files_store.asetup()

    runner = ActionRunner(files_store, config=config.runner)
    try:
        for data in records:
            runner.add_action(data)
            for partial in stream_chunks(data, chunk_size):
                await runner.arun_action(partial, is_streaming=True)
            await runner.arun_action(data)
    finally:
        await runner.queue.aclose()
    return runner, files_store


def _render_states(states: list[ActionState]) -> Table:
    table = Table(title="Actions", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Target")
    table.add_column("Status")

    for state in states:
        target = state.file_path if state.type == ActionType.FILE else state.content
        style = _STATUS_STYLES.get(state.status, "white")
        table.add_row(
            state.action_id,
            str(state.type),
            (target or "").splitlines()[0] if target else "",
            f"[{style}]{state.status}[/{style}]",
        )
    return table


def apply(
    ctx: typer.Context,
    actions_file: Path = typer.Argument(..., help="YAML or JSON file with action records"),
    storage_dir: Path | None = typer.Option(
        None, "--storage-dir", "-s", help="Persist the virtual workspace in this directory"
    ),
    chunk_size: int = typer.Option(
        0, "--chunk-size", help="Stream file content in chunks of this many characters"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file path"),
) -> None:
    """Apply actions to the virtual workspace and report their final status."""
    if not actions_file.exists():
        console.print(f"[red]Error:[/red] File not found: {actions_file}")
        raise typer.Exit(1)

    try:
        config = load_config(config_path)
        configure_cli_logging(ctx, config.logging)
        records = load_action_records(actions_file)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    runner, files_store = asyncio.run(
        apply_actions(records, config=config, storage_dir=storage_dir, chunk_size=chunk_size)
    )

    states = [runner.actions.get_key(data.action_id) for data in records]
    ordered = [state for state in states if state is not None]
    console.print(_render_states(ordered))
    console.print(f"[bold]Files in workspace:[/bold] {files_store.files_count}")

    if any(state.status == ActionStatus.FAILED for state in ordered):
        raise typer.Exit(1)
