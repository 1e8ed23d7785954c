"""
Sentinel for unresolved property paths.

ABSENT is what path resolution returns when a link in the path cannot be
followed: an intermediate object is None, or an index is out of range.
Bindings map it to the target's empty representation.
"""

from typing import Final


class _Absent:
    """Sentinel class for representing an unresolvable path."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT: Final = _Absent()


def is_absent(value) -> bool:
    """True for ABSENT and None, the two values that end a path walk."""
    return value is ABSENT or value is None
