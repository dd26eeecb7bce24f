"""Key-value persistence drivers."""

from actionkit.drivers.storage.json_file import JsonFileKeyValueStore
from actionkit.drivers.storage.memory import InMemoryKeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
