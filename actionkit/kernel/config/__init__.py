"""Configuration models and loader."""

from actionkit.kernel.config.loader import ConfigLoader, load_config
from actionkit.kernel.config.models import (
    ActionKitConfig,
    FileStoreConfig,
    LoggingConfig,
    RunnerConfig,
)

__all__ = [
    "ActionKitConfig",
    "ConfigLoader",
    "FileStoreConfig",
    "LoggingConfig",
    "RunnerConfig",
    "load_config",
]
