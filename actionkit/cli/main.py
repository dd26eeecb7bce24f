"""actionkit CLI - Main entrypoint."""

import typer
from rich.console import Console

from actionkit import __version__
from actionkit.cli.commands import apply_cmd, files_cmd
from actionkit.kernel.logging import configure_logging

app = typer.Typer(
    name="actionkit",
    help="actionkit - apply streamed file/shell actions to a virtual workspace.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]actionkit[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


app.command("apply", help="Apply an action file to the virtual workspace")(apply_cmd.apply)
app.add_typer(files_cmd.app, name="files", help="Inspect or clear a persisted workspace")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress non-error output"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable verbose logging"),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log format: console|json|structured|rich"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """actionkit CLI.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    Commands merge them over the `logging` section of the loaded config.
    """
    if ctx.obj is None:
        ctx.obj = {}

    flag_level: str | None = None
    if quiet:
        flag_level = "ERROR"
    elif verbose:
        flag_level = "DEBUG"

    ctx.obj.update(
        {"quiet": quiet, "verbose": verbose, "log_level": flag_level, "log_format": log_format}
    )

    if flag_level or log_format:
        configure_logging(
            level=flag_level or "INFO",  # type: ignore[arg-type]
            format=log_format or "structured",  # type: ignore[arg-type]
        )


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
