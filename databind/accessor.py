"""
Reflection-style access to named properties of arbitrary objects.

The binding engine never touches model or target objects directly; it goes
through a PropertyAccessor, which offers get/set/observe over a single named
property. Objects opt into change notification by implementing the
SupportsPropertyObservers capability (Observable does); collections opt
into structural notification by implementing SupportsChangeObservers
(ObservableList does).
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from .absent import ABSENT
from .exceptions import NoSuchPropertyError, UnsupportedIndexError
from .model import is_read_only_property


@runtime_checkable
class SupportsPropertyObservers(Protocol):
    """Capability interface for objects that report property writes."""

    def add_property_observer(self, name: str, callback: Callable[[Any], None]) -> int: ...

    def remove_property_observer(self, name: str, observer_id: int) -> bool: ...


@runtime_checkable
class SupportsChangeObservers(Protocol):
    """Capability interface for sequences that report structural changes."""

    def add_change_observer(self, callback: Callable[[Any], None]) -> int: ...

    def remove_change_observer(self, observer_id: int) -> bool: ...


@dataclass(eq=False)
class Subscription:
    """
    Handle for one registered observer.

    A subscription on something that cannot be observed is created inactive
    and cancelling it does nothing. cancel() is idempotent.
    """
    owner: Any
    name: Optional[str]
    observer_id: Optional[int] = None
    _remove: Optional[Callable[[], Any]] = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._remove is not None

    def cancel(self) -> None:
        remove, self._remove = self._remove, None
        if remove is not None:
            remove()


class PropertyAccessor:
    """
    get/set/observe for one named property of an arbitrary object.

    Readers are attributes and properties; writers are attributes and
    properties with a setter.
    """

    def get(self, obj: Any, name: str) -> Any:
        try:
            return getattr(obj, name)
        except AttributeError as e:
            raise NoSuchPropertyError(obj, name) from e

    def set(self, obj: Any, name: str, value: Any) -> None:
        if is_read_only_property(obj, name):
            raise NoSuchPropertyError(obj, name, f"Property '{name}' of {type(obj).__name__} is read-only")
        if not hasattr(obj, name):
            raise NoSuchPropertyError(obj, name)
        try:
            setattr(obj, name, value)
        except AttributeError as e:
            raise NoSuchPropertyError(obj, name) from e

    # Indexed access

    def is_sequence(self, value: Any) -> bool:
        return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))

    def get_item(self, container: Any, index: int) -> Any:
        """Element at index, or ABSENT when the index is out of range."""
        if 0 <= index < len(container):
            return container[index]
        return ABSENT

    def set_item(self, owner: Any, name: str, container: Any, index: int, value: Any) -> bool:
        """
        Write an element of a sequence property.

        Returns False without writing when the index is out of range.
        """
        if not isinstance(container, MutableSequence):
            raise UnsupportedIndexError(owner, name, container)
        if not 0 <= index < len(container):
            return False
        container[index] = value
        return True

    # Observation

    def supports_observer(self, obj: Any, name: str) -> bool:
        if not isinstance(obj, SupportsPropertyObservers):
            return False
        check = getattr(obj, "supports_property_observer", None)
        if callable(check):
            return bool(check(name))
        return not is_read_only_property(obj, name)

    def observe(self, obj: Any, name: str, callback: Callable[[Any], None]) -> Subscription:
        """
        Register callback for writes to obj.name.

        Returns an inactive subscription when the property cannot be
        observed; use supports_observer() to tell the two apart.
        """
        if not self.supports_observer(obj, name):
            return Subscription(obj, name)
        observer_id = obj.add_property_observer(name, callback)
        return Subscription(
            obj, name, observer_id,
            lambda: obj.remove_property_observer(name, observer_id),
        )

    def unobserve(self, subscription: Subscription) -> None:
        subscription.cancel()

    def supports_collection_observer(self, value: Any) -> bool:
        return isinstance(value, SupportsChangeObservers)

    def observe_collection(self, sequence: Any, callback: Callable[[Any], None]) -> Subscription:
        """Register callback for structural changes of a sequence."""
        if not self.supports_collection_observer(sequence):
            return Subscription(sequence, None)
        observer_id = sequence.add_change_observer(callback)
        return Subscription(
            sequence, None, observer_id,
            lambda: sequence.remove_change_observer(observer_id),
        )

    # Targets

    def empty_value(self, target: Any, name: str) -> Any:
        """
        The value a target shows when its bound path is absent.

        Targets declare it with an empty_value(name) method; the default is
        the empty string.
        """
        declared = getattr(target, "empty_value", None)
        if callable(declared):
            return declared(name)
        return ""


default_accessor = PropertyAccessor()
