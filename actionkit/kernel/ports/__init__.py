"""Port interfaces implemented by actionkit drivers."""

from actionkit.kernel.ports.key_value import SupportsKeyValue
from actionkit.kernel.ports.observable import MapListener, ObservableMap, Unsubscribe

__all__ = ["MapListener", "ObservableMap", "SupportsKeyValue", "Unsubscribe"]
