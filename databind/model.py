"""
Observable base class for bindable domain models.

Models are plain Python classes that inherit from Observable. Every write to
a public attribute notifies the observers registered for that attribute:

    class Person(databind.Observable):
        def __init__(self, name=None):
            self.name = name
            self.addresses = []     # stored as an ObservableList

    person = Person("Bruce Ting")
    person.add_property_observer("name", print)
    person.name = "Lady Butterfly"  # prints "Lady Butterfly"
    person.name = "Lady Butterfly"  # equal value, no notification

Rules:
- Attributes whose name starts with an underscore are private and never
  notify.
- A plain list assigned to a public attribute is converted to an
  ObservableList so indexed paths can follow its structural changes.
- Read-only properties (a property without a setter) are computed values.
  They never notify; bind them with computed_by.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List, Optional

from .absent import ABSENT
from .collection import ObservableList
from .observers import PropertyObservers, values_differ


def is_read_only_property(obj: Any, name: str) -> bool:
    """True when name is a property of obj's class that has no setter."""
    attr = inspect.getattr_static(type(obj), name, None)
    return isinstance(attr, property) and attr.fset is None


class Observable:
    """
    Base class for objects that report property changes.

    Subclasses do not need to call super().__init__(); the observer registry
    is created in __new__.
    """

    _property_observers: Dict[str, PropertyObservers]

    def __new__(cls, *args: Any, **kwargs: Any):
        obj = super().__new__(cls)
        object.__setattr__(obj, "_property_observers", {})
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return

        if type(value) is list:
            value = ObservableList(value)

        old = getattr(self, name, ABSENT)
        object.__setattr__(self, name, value)
        new = getattr(self, name, value)
        if old is ABSENT or values_differ(old, new):
            self.notify_property_changed(name, new)

    def __getstate__(self) -> Dict[str, Any]:
        # Copies and unpickled objects start without observers; __new__
        # gives them a registry of their own.
        state = self.__dict__.copy()
        state.pop("_property_observers", None)
        return state

    # Observer registration

    def add_property_observer(self, name: str, callback: Callable[[Any], None]) -> int:
        """
        Register a callback for writes to a property.

        The callback receives the new value. Returns an observer id for
        remove_property_observer().
        """
        observers = self._property_observers.get(name)
        if observers is None:
            observers = self._property_observers[name] = PropertyObservers()
        return observers.add(callback)

    def remove_property_observer(self, name: str, observer_id: int) -> bool:
        """Remove an observer. Returns False if it was not registered."""
        observers = self._property_observers.get(name)
        if observers is None:
            return False
        removed = observers.remove(observer_id)
        if not observers:
            del self._property_observers[name]
        return removed

    def supports_property_observer(self, name: str) -> bool:
        return not is_read_only_property(self, name)

    def notify_property_changed(self, name: str, value: Any = ABSENT) -> None:
        """
        Notify the observers of a property.

        Called automatically on attribute writes. Call it manually when a
        property changes without an attribute write.
        """
        observers = self._property_observers.get(name)
        if not observers:
            return
        if value is ABSENT:
            value = getattr(self, name, None)
        observers.notify(value)

    # Introspection

    def property_observers(self, name: str) -> List[Callable[[Any], None]]:
        """The callbacks currently observing a property."""
        observers = self._property_observers.get(name)
        return observers.callbacks() if observers else []

    def observer_count(self, name: Optional[str] = None) -> int:
        """Number of live observers on one property, or on all of them."""
        if name is not None:
            observers = self._property_observers.get(name)
            return len(observers) if observers else 0
        return sum(len(observers) for observers in self._property_observers.values())

    def observed_properties(self) -> List[str]:
        return [name for name, observers in self._property_observers.items() if observers]
