"""CLI command modules."""

from . import apply_cmd, files_cmd

__all__ = ["apply_cmd", "files_cmd"]
