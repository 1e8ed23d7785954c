"""
Observable list: the collection proxy used by indexed property paths.

Every mutating list operation is reported to change observers as a
ListChange after the mutation has happened. The change carries the
affected index range so an observer watching one index can tell whether
the element at its index may now be a different object; inserts and
deletes shift every later element, so they affect every index from their
start onwards.

Usage:
    addresses = ObservableList([home, work])
    addresses.add_change_observer(lambda change: print(change))
    addresses.append(holiday)   # ListChange(INSERT, 2, 3)
    del addresses[0]            # ListChange(DELETE, 0, 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, SupportsIndex

from .observers import PropertyObservers, values_differ


class ListChangeKind(Enum):
    """What happened to the list."""
    SET = "set"            # Elements replaced in place, length unchanged
    INSERT = "insert"      # Elements inserted, later elements shifted right
    DELETE = "delete"      # Elements removed, later elements shifted left
    SPLICE = "splice"      # Slice replaced by a slice of different length
    CLEAR = "clear"        # All elements removed
    REORDER = "reorder"    # sort() / reverse()


@dataclass(frozen=True)
class ListChange:
    """
    A structural change to an ObservableList.

    start/stop delimit the affected slice of the list as it was for SET,
    DELETE, SPLICE and CLEAR, and of the list as it is now for INSERT.
    """
    kind: ListChangeKind
    start: int
    stop: int

    def affects(self, index: int) -> bool:
        """Whether the element at index may differ after this change."""
        if self.kind is ListChangeKind.SET:
            return self.start <= index < self.stop
        if self.kind in (ListChangeKind.INSERT, ListChangeKind.DELETE, ListChangeKind.SPLICE):
            return index >= self.start
        return True


ChangeCallback = Callable[[ListChange], None]


class ObservableList(list):
    """A list that reports its structural mutations to change observers."""

    def __init__(self, iterable: Iterable[Any] = ()):
        super().__init__(iterable)
        self._change_observers = PropertyObservers()

    def __repr__(self) -> str:
        return f"ObservableList({list.__repr__(self)})"

    def __reduce__(self):
        # Copies and unpickled lists start without observers
        return (type(self), (list(self),))

    # Observer registration

    def add_change_observer(self, callback: ChangeCallback) -> int:
        """Register a callback receiving a ListChange after each mutation."""
        return self._change_observers.add(callback)

    def remove_change_observer(self, observer_id: int) -> bool:
        return self._change_observers.remove(observer_id)

    def change_observers(self) -> List[ChangeCallback]:
        """The callbacks currently registered, in registration order."""
        return self._change_observers.callbacks()

    def observer_count(self) -> int:
        return len(self._change_observers)

    def _emit(self, kind: ListChangeKind, start: int, stop: int) -> None:
        self._change_observers.notify(ListChange(kind, start, stop))

    def _normalize_index(self, index: SupportsIndex) -> int:
        i = index.__index__()
        if i < 0:
            i += len(self)
        if not 0 <= i < len(self):
            raise IndexError("list index out of range")
        return i

    # Mutating operations

    def append(self, item: Any) -> None:
        super().append(item)
        self._emit(ListChangeKind.INSERT, len(self) - 1, len(self))

    def extend(self, items: Iterable[Any]) -> None:
        start = len(self)
        super().extend(items)
        if len(self) > start:
            self._emit(ListChangeKind.INSERT, start, len(self))

    def insert(self, index: SupportsIndex, item: Any) -> None:
        size = len(self)
        i = index.__index__()
        if i < 0:
            i = max(0, size + i)
        i = min(i, size)
        super().insert(i, item)
        self._emit(ListChangeKind.INSERT, i, i + 1)

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            size = len(self)
            start, stop, step = index.indices(size)
            super().__setitem__(index, value)
            if step != 1:
                self._emit(ListChangeKind.SET, min(start, stop), max(start, stop) + 1)
            elif len(self) != size:
                self._emit(ListChangeKind.SPLICE, start, max(start, stop))
            elif stop > start:
                self._emit(ListChangeKind.SET, start, stop)
            return

        i = self._normalize_index(index)
        old = list.__getitem__(self, i)
        super().__setitem__(i, value)
        if values_differ(old, value):
            self._emit(ListChangeKind.SET, i, i + 1)

    def __delitem__(self, index) -> None:
        if isinstance(index, slice):
            size = len(self)
            start, stop, step = index.indices(size)
            super().__delitem__(index)
            if len(self) != size:
                first = start if step > 0 else stop + 1
                self._emit(ListChangeKind.DELETE, first, first + size - len(self))
            return

        i = self._normalize_index(index)
        super().__delitem__(i)
        self._emit(ListChangeKind.DELETE, i, i + 1)

    def pop(self, index: SupportsIndex = -1) -> Any:
        if not self:
            raise IndexError("pop from empty list")
        i = self._normalize_index(index)
        item = super().pop(i)
        self._emit(ListChangeKind.DELETE, i, i + 1)
        return item

    def remove(self, value: Any) -> None:
        """Delete the first element equal to value."""
        del self[self.index(value)]

    def clear(self) -> None:
        size = len(self)
        super().clear()
        if size:
            self._emit(ListChangeKind.CLEAR, 0, size)

    def __iadd__(self, other: Iterable[Any]) -> ObservableList:
        self.extend(other)
        return self

    def __imul__(self, times: SupportsIndex) -> ObservableList:
        size = len(self)
        super().__imul__(times)
        if len(self) > size:
            self._emit(ListChangeKind.INSERT, size, len(self))
        elif len(self) < size:
            self._emit(ListChangeKind.CLEAR, 0, size)
        return self

    def sort(self, *args: Any, **kwargs: Any) -> None:
        super().sort(*args, **kwargs)
        if len(self) > 1:
            self._emit(ListChangeKind.REORDER, 0, len(self))

    def reverse(self) -> None:
        super().reverse()
        if len(self) > 1:
            self._emit(ListChangeKind.REORDER, 0, len(self))
