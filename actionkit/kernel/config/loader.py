"""Configuration loader for actionkit.

Supports two config sources:

1. **kind: Config YAML**: loaded via explicit path or the
   ``ACTIONKIT_CONFIG_PATH`` env var.
2. **pyproject.toml [tool.actionkit]**: auto-discovery fallback.

When neither is found the defaults are used. ``${VAR}`` placeholders are
substituted from the environment and ``ACTIONKIT_LOG_*`` variables override
the logging section.
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any

import yaml

from actionkit.kernel.config.models import (
    DEFAULT_STORAGE_KEY,
    DEFAULT_WORK_DIR,
    ActionKitConfig,
    FileStoreConfig,
    LoggingConfig,
    RunnerConfig,
)
from actionkit.kernel.exceptions import ConfigurationError, ValidationError
from actionkit.kernel.logging import get_logger

_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse a boolean environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


class ConfigLoader:
    """Loads and processes actionkit configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load(self, path: str | Path | None = None) -> ActionKitConfig:
        """Load configuration from YAML or pyproject.toml, or return defaults.

        Parameters
        ----------
        path : str | Path | None
            Explicit config path. If None, searches using discovery order.

        Raises
        ------
        FileNotFoundError
            If an explicit ``path`` does not exist
        ConfigurationError
            If the file exists but is not a valid configuration
        """
        config_path = self._find_config_file(path)
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return self._parse_config({})

        logger.info("Loading configuration from {path}", path=config_path)
        if config_path.suffix in (".yaml", ".yml"):
            data = self._load_yaml(config_path)
        else:
            data = self._load_toml(config_path)
        return self._parse_config(self._substitute_env_vars(data))

    def _load_yaml(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                str(config_path), f"expected a mapping, got {type(data).__name__}"
            )

        kind = data.get("kind")
        if kind != "Config":
            raise ConfigurationError(
                str(config_path), f"YAML config must use 'kind: Config', got 'kind: {kind}'"
            )

        spec = data.get("spec") or {}
        if not isinstance(spec, dict):
            raise ConfigurationError(str(config_path), "'spec' must be a mapping")
        return spec

    def _load_toml(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("rb") as f:
            data = tomllib.load(f)

        section = data.get("tool", {}).get("actionkit")
        if section is None:
            if config_path.name == "pyproject.toml":
                logger.warning("No [tool.actionkit] section in {path}, using defaults", path=config_path)
                return {}
            return data
        return section

    def _find_config_file(self, path: str | Path | None) -> Path | None:
        """Find the configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``ACTIONKIT_CONFIG_PATH`` env var
        3. ``pyproject.toml`` with ``[tool.actionkit]`` in CWD or a parent
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("ACTIONKIT_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                return config_path
            logger.warning("ACTIONKIT_CONFIG_PATH set but file not found: {path}", path=config_path)

        current = Path.cwd()
        for directory in (current, *current.parents):
            pyproject = directory / "pyproject.toml"
            if not pyproject.exists():
                continue
            with pyproject.open("rb") as f:
                data = tomllib.load(f)
            if "actionkit" in data.get("tool", {}):
                return pyproject
        return None

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` with environment values; unknown vars are kept."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                value = os.environ.get(match.group(1))
                return match.group(0) if value is None else value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> ActionKitConfig:
        runner_data = data.get("runner") or {}
        files_data = data.get("files") or {}

        surface_write_errors = runner_data.get("surface_write_errors", False)
        if isinstance(surface_write_errors, str):
            try:
                surface_write_errors = _parse_bool_env(surface_write_errors)
            except ValueError as e:
                raise ConfigurationError("runner", str(e)) from e

        try:
            files = FileStoreConfig(
                work_dir=files_data.get("work_dir", DEFAULT_WORK_DIR),
                storage_key=files_data.get("storage_key", DEFAULT_STORAGE_KEY),
            )
        except ValidationError as e:
            raise ConfigurationError("files", str(e)) from e

        return ActionKitConfig(
            logging=self._parse_logging_config(data.get("logging") or {}),
            runner=RunnerConfig(surface_write_errors=bool(surface_write_errors)),
            files=files,
        )

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse the logging section; environment variables take precedence.

        - ACTIONKIT_LOG_LEVEL: Log level
        - ACTIONKIT_LOG_FORMAT: Output format (console, json, structured, rich)
        - ACTIONKIT_LOG_FILE: Optional file path for JSON log output
        - ACTIONKIT_LOG_COLOR: Use color output (true/false)
        """
        level = logging_data.get("level", "INFO")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)

        if env_level := os.getenv("ACTIONKIT_LOG_LEVEL"):
            level = env_level
        if env_format := os.getenv("ACTIONKIT_LOG_FORMAT"):
            format_type = env_format
        if env_file := os.getenv("ACTIONKIT_LOG_FILE"):
            output_file = env_file
        if env_color := os.getenv("ACTIONKIT_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                raise ConfigurationError("logging", f"ACTIONKIT_LOG_COLOR: {e}") from e

        level = str(level).upper()
        format_type = str(format_type).lower()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError("logging", f"unknown level {level!r}")
        if format_type not in ("console", "json", "structured", "rich"):
            raise ConfigurationError("logging", f"unknown format {format_type!r}")

        return LoggingConfig(
            level=level,  # type: ignore[arg-type]
            format=format_type,  # type: ignore[arg-type]
            output_file=output_file,
            use_color=bool(use_color),
            include_timestamp=bool(include_timestamp),
        )


def load_config(path: str | Path | None = None) -> ActionKitConfig:
    """Load actionkit configuration (see :class:`ConfigLoader`)."""
    return ConfigLoader().load(path)


__all__ = ["ConfigLoader", "load_config"]
