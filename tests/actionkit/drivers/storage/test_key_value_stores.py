"""Tests for key-value persistence drivers."""

from __future__ import annotations

import pytest

from actionkit.drivers.storage.json_file import JsonFileKeyValueStore
from actionkit.drivers.storage.memory import InMemoryKeyValueStore
from actionkit.kernel.exceptions import StorageError
from actionkit.kernel.ports.key_value import SupportsKeyValue


class TestProtocol:
    def test_drivers_satisfy_protocol(self, tmp_path) -> None:
        assert isinstance(InMemoryKeyValueStore(), SupportsKeyValue)
        assert isinstance(JsonFileKeyValueStore(tmp_path), SupportsKeyValue)


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_set_get_delete(self) -> None:
        store = InMemoryKeyValueStore()
        await store.aset("k", "v")

        assert await store.aget("k") == "v"
        assert await store.adelete("k") is True
        assert await store.adelete("k") is False
        assert await store.aget("k") is None

    @pytest.mark.asyncio
    async def test_access_history_recorded(self) -> None:
        store = InMemoryKeyValueStore()
        await store.aset("k", "v")
        await store.aget("k")

        assert [entry["operation"] for entry in store.access_history] == ["set", "get"]

    @pytest.mark.asyncio
    async def test_failure_injection(self) -> None:
        store = InMemoryKeyValueStore(fail_on={"set"})

        with pytest.raises(StorageError, match="simulated set failure"):
            await store.aset("k", "v")
        assert await store.aget("k") is None

    @pytest.mark.asyncio
    async def test_reset_clears_everything(self) -> None:
        store = InMemoryKeyValueStore()
        await store.aset("k", "v")
        store.reset()

        assert store.storage == {}
        assert store.access_history == []


class TestJsonFileKeyValueStore:
    @pytest.mark.asyncio
    async def test_values_persist_across_instances(self, tmp_path) -> None:
        await JsonFileKeyValueStore(tmp_path).aset("actionkit-files", '{"a": 1}')

        reopened = JsonFileKeyValueStore(tmp_path)
        assert await reopened.aget("actionkit-files") == '{"a": 1}'
        assert (tmp_path / "actionkit-files.json").exists()

    @pytest.mark.asyncio
    async def test_keys_are_made_filesystem_safe(self, tmp_path) -> None:
        store = JsonFileKeyValueStore(tmp_path)
        await store.aset("ns:a/b", "x")

        assert (tmp_path / "ns_a_b.json").read_text(encoding="utf-8") == "x"

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, tmp_path) -> None:
        store = JsonFileKeyValueStore(tmp_path)
        assert await store.aget("missing") is None
        assert await store.adelete("missing") is False

    @pytest.mark.asyncio
    async def test_empty_key_rejected(self, tmp_path) -> None:
        with pytest.raises(StorageError):
            await JsonFileKeyValueStore(tmp_path).aget("")

    def test_creates_base_directory(self, tmp_path) -> None:
        target = tmp_path / "nested" / "store"
        JsonFileKeyValueStore(target)
        assert target.is_dir()
