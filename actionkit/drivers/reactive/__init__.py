"""Reactive observable map driver."""

from actionkit.drivers.reactive.map_store import MapStore

__all__ = ["MapStore"]
