"""Apply the ``logging`` config section to the CLI process."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from actionkit.kernel.logging import configure_logging

if TYPE_CHECKING:
    import typer

    from actionkit.kernel.config.models import LoggingConfig


def configure_cli_logging(ctx: typer.Context | None, logging_config: LoggingConfig) -> None:
    """Configure logging from ``logging_config``.

    ``--verbose``/``--quiet`` and ``--log-format`` given on the command line
    (stored on ``ctx.obj`` by the root callback) win over the config values.

    Args
    ----
        ctx: Typer context of the running command, or ``None``
        logging_config: Logging section of the loaded configuration
    """
    flags: dict[str, Any] = {}
    if ctx is not None:
        root = ctx.find_root()
        flags = root.obj or {}

    configure_logging(
        level=flags.get("log_level") or logging_config.level,
        format=flags.get("log_format") or logging_config.format,
        output_file=logging_config.output_file,
        use_color=logging_config.use_color,
        include_timestamp=logging_config.include_timestamp,
    )


__all__ = ["configure_cli_logging"]
