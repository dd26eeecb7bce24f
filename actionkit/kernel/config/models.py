"""Configuration data models for actionkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from actionkit.kernel.exceptions import ValidationError

DEFAULT_WORK_DIR = "/home/project"
DEFAULT_STORAGE_KEY = "actionkit-files"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.actionkit.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export ACTIONKIT_LOG_LEVEL=DEBUG
    export ACTIONKIT_LOG_FORMAT=json
    export ACTIONKIT_LOG_FILE=/var/log/actionkit/app.log
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class RunnerConfig:
    """Action execution engine settings.

    Attributes
    ----------
    surface_write_errors : bool, default=False
        When False a failed file write is logged and the action still ends
        ``complete``. When True the failure marks the action ``failed``.
    """

    surface_write_errors: bool = False


@dataclass(frozen=True, slots=True)
class FileStoreConfig:
    """Virtual file store settings.

    Attributes
    ----------
    work_dir : str, default="/home/project"
        Workspace root that relative paths are resolved under.
    storage_key : str, default="actionkit-files"
        Key under which the file mapping is persisted.
    """

    work_dir: str = DEFAULT_WORK_DIR
    storage_key: str = DEFAULT_STORAGE_KEY

    def __post_init__(self) -> None:
        if not isinstance(self.work_dir, str) or not self.work_dir.startswith("/"):
            raise ValidationError("work_dir", "must be an absolute path", self.work_dir)
        if not isinstance(self.storage_key, str) or not self.storage_key:
            raise ValidationError("storage_key", "cannot be empty")


@dataclass(slots=True)
class ActionKitConfig:
    """Complete actionkit configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    files: FileStoreConfig = field(default_factory=FileStoreConfig)


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "DEFAULT_WORK_DIR",
    "ActionKitConfig",
    "FileStoreConfig",
    "LoggingConfig",
    "RunnerConfig",
]
