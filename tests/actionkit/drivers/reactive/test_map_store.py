"""Tests for the observable map store."""

from __future__ import annotations

from actionkit.drivers.reactive.map_store import MapStore
from actionkit.kernel.ports.observable import ObservableMap


class TestProtocol:
    def test_map_store_satisfies_observable_map(self) -> None:
        assert isinstance(MapStore(), ObservableMap)


class TestReads:
    def test_get_returns_snapshot_copy(self) -> None:
        store: MapStore[int] = MapStore({"a": 1})
        snapshot = store.get()
        snapshot["b"] = 2

        assert store.get() == {"a": 1}
        assert "b" not in store
        assert len(store) == 1

    def test_get_key_missing_returns_none(self) -> None:
        assert MapStore[int]().get_key("nope") is None


class TestNotifications:
    def test_subscribe_replays_current_value(self) -> None:
        store: MapStore[int] = MapStore({"a": 1})
        calls: list[tuple[dict[str, int], str | None]] = []

        store.subscribe(lambda snapshot, key: calls.append((snapshot, key)))

        assert calls == [({"a": 1}, None)]

    def test_listen_only_sees_future_changes(self) -> None:
        store: MapStore[int] = MapStore({"a": 1})
        keys: list[str | None] = []

        store.listen(lambda _snapshot, key: keys.append(key))
        store.set_key("b", 2)
        store.delete_key("a")
        store.set({"c": 3})

        assert keys == ["b", "a", None]

    def test_delete_missing_key_does_not_notify(self) -> None:
        store: MapStore[int] = MapStore()
        keys: list[str | None] = []
        store.listen(lambda _snapshot, key: keys.append(key))

        assert store.delete_key("ghost") is False
        assert keys == []

    def test_unsubscribe_stops_notifications(self) -> None:
        store: MapStore[int] = MapStore()
        keys: list[str | None] = []
        unsubscribe = store.listen(lambda _snapshot, key: keys.append(key))

        store.set_key("a", 1)
        unsubscribe()
        store.set_key("b", 2)

        assert keys == ["a"]

    def test_failing_listener_is_isolated(self) -> None:
        store: MapStore[int] = MapStore()
        seen: list[str | None] = []

        def broken(_snapshot: dict[str, int], _key: str | None) -> None:
            raise RuntimeError("listener bug")

        store.listen(broken)
        store.listen(lambda _snapshot, key: seen.append(key))
        store.set_key("a", 1)

        assert seen == ["a"]
        assert store.get_key("a") == 1
