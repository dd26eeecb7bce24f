"""Centralized logging configuration for actionkit using Loguru.

Every module obtains its logger through :func:`get_logger`; components
that want a stable, human-facing scope (``ActionRunner``, ``FilesStore``)
use :func:`get_scoped_logger` instead.

Examples
--------
Basic usage:

>>> from actionkit.kernel.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Action queued", action_id="a1")

Configure logging globally::

    from actionkit.kernel.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
    backtrace: bool = True,
    diagnose: bool = False,
) -> None:
    """Configure global logging for actionkit.

    Idempotent: calling it again with the same settings does not add
    handlers. Only handlers added here are removed on reconfiguration,
    so sinks installed by pytest or the host application survive.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": plain single-line output
        - "json": serialized records for log aggregation
        - "structured": colored, module-qualified lines (Loguru native)
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file path; file output is always JSON and rotated
    use_color : bool, default=True
        Use ANSI colors in the structured format (disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Reconfigure even if the settings are unchanged
    backtrace : bool, default=True
        Extended tracebacks on logged exceptions
    diagnose : bool, default=False
        Show variable values in tracebacks (leaks file content, keep off in prod)
    """
    global _CURRENT_CONFIG

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
        "backtrace": backtrace,
        "diagnose": diagnose,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(
            sink=rich_handler,
            level=level,
            format="{message}",
            backtrace=backtrace,
            diagnose=diagnose,
        )
        _HANDLER_IDS.append(handler_id)

    elif format == "json":
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            serialize=True,
            backtrace=backtrace,
            diagnose=diagnose,
        )
        _HANDLER_IDS.append(handler_id)

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        colorize = use_color and sys.stderr.isatty()
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{extra[module]}:{function}:{line}</cyan> | <level>{message}</level>"
        )

        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=colorize,
            backtrace=backtrace,
            diagnose=diagnose,
            filter=_ensure_module_extra,
        )
        _HANDLER_IDS.append(handler_id)

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        console_format = f"{timestamp_fmt}{{level: <8}} | {{extra[module]}} | {{message}}"

        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=console_format,
            colorize=False,
            backtrace=backtrace,
            diagnose=diagnose,
            filter=_ensure_module_extra,
        )
        _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        handler_id = logger.add(
            sink=output_path,
            level=level,
            serialize=True,
            rotation="10 MB",
            retention="1 week",
            compression="zip",
            backtrace=backtrace,
            diagnose=diagnose,
        )
        _HANDLER_IDS.append(handler_id)

    _CURRENT_CONFIG = current_config


def _ensure_module_extra(record: dict) -> bool:
    """Default ``extra[module]`` for records logged through the bare loguru logger."""
    record["extra"].setdefault("module", record["name"])
    return True


@lru_cache(maxsize=256)
def get_logger(name: str) -> Logger:
    """Get a logger bound with the given module name (cached).

    Parameters
    ----------
    name : str
        Logger name, typically ``__name__`` of the calling module

    Returns
    -------
    loguru.Logger
        Logger bound with ``module=name``

    Notes
    -----
    If :func:`configure_logging` hasn't been called yet, defaults are
    applied from ``ACTIONKIT_LOG_LEVEL`` / ``ACTIONKIT_LOG_FORMAT``.
    """
    _ensure_configured()
    return logger.bind(module=name)


@lru_cache(maxsize=128)
def get_scoped_logger(scope: str) -> Logger:
    """Get a logger for a named engine component.

    >>> logger = get_scoped_logger("ActionRunner")
    >>> logger.debug("File written {path}", path="/home/project/a.txt")
    """
    _ensure_configured()
    return logger.bind(module=f"actionkit.{scope}", scope=scope)


def _ensure_configured() -> None:
    """Apply a default configuration if nothing has been configured yet."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("ACTIONKIT_LOG_LEVEL", "INFO").upper()
        format_type = os.getenv("ACTIONKIT_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore[arg-type]


__all__ = [
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "get_scoped_logger",
]
