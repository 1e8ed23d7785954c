"""
Observer bookkeeping shared by observable models and collections.

A PropertyObservers instance is the observer list of a single observable
thing: one property of one object, or the structure of one list. Observer
ids are unique across the process so a subscription handle can never
remove somebody else's callback.
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Dict, List

_observer_ids = itertools.count(1)


class PropertyObservers:
    """
    Ordered mapping of observer id -> callback.

    Callbacks run in registration order. Dispatch works on a snapshot, and
    an observer removed by an earlier callback of the same dispatch is not
    called.
    """

    __slots__ = ("_callbacks",)

    def __init__(self):
        self._callbacks: Dict[int, Callable[..., Any]] = {}

    def add(self, callback: Callable[..., Any]) -> int:
        """Register a callback and return its observer id."""
        observer_id = next(_observer_ids)
        self._callbacks[observer_id] = callback
        return observer_id

    def remove(self, observer_id: int) -> bool:
        """Remove a callback. Returns False if it was not registered."""
        return self._callbacks.pop(observer_id, None) is not None

    def notify(self, *args: Any) -> None:
        """Invoke every registered callback with the given arguments."""
        for observer_id, callback in list(self._callbacks.items()):
            if observer_id in self._callbacks:
                callback(*args)

    def callbacks(self) -> List[Callable[..., Any]]:
        return list(self._callbacks.values())

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, observer_id: object) -> bool:
        return observer_id in self._callbacks


def tracks_identity(value: Any) -> bool:
    """True for values that carry their own observers (models, observable lists)."""
    return hasattr(value, "add_property_observer") or hasattr(value, "add_change_observer")


def values_differ(old: Any, new: Any) -> bool:
    """
    Decide whether a write from old to new is a change worth notifying.

    Plain values compare with their own ==. Observable containers compare
    by identity: observers are attached to the instance, so replacing one
    with an equal copy still has to re-wire whoever watches it.
    """
    if old is new:
        return False
    if tracks_identity(old) or tracks_identity(new):
        return True
    try:
        return bool(old != new)
    except (TypeError, ValueError):
        # Values without a usable truth value for != (e.g. arrays)
        return True
