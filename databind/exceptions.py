"""
Custom exceptions for the binding engine.
"""

from typing import Any, Optional


class BindingError(Exception):
    """Base exception for all binding-related errors."""
    pass


class InvalidPathError(BindingError):
    """Raised when a property path expression is malformed."""

    def __init__(self, expression: str, position: int, reason: str):
        self.expression = expression
        self.position = position
        self.reason = reason
        super().__init__(f"Invalid property path {expression!r} at position {position}: {reason}")


class NoSuchPropertyError(BindingError):
    """
    Raised when an object exposes no reader or writer for a property.

    Only raised when resolution actually reaches the segment; segments
    behind an absent link are never looked up.
    """

    def __init__(self, owner: Any, name: str, message: Optional[str] = None):
        self.owner = owner
        self.name = name
        msg = message or f"{type(owner).__name__} has no property '{name}'"
        super().__init__(msg)


class UnsupportedIndexError(BindingError):
    """Raised when an indexed segment is applied to a non-sequence value."""

    def __init__(self, owner: Any, name: str, value: Any):
        self.owner = owner
        self.name = name
        self.value = value
        super().__init__(
            f"Cannot index '{name}' of {type(owner).__name__}: "
            f"{type(value).__name__} is not a sequence"
        )


class NotObservableError(BindingError):
    """
    Raised at bind time when a link of the path cannot report changes.

    A binding that cannot observe its source would silently go stale, so
    this is treated as a caller error.
    """

    def __init__(self, owner: Any, name: str):
        self.owner = owner
        self.name = name
        super().__init__(
            f"Property '{name}' of {type(owner).__name__} does not support change notification"
        )


class ConversionError(BindingError):
    """Raised when a value cannot be converted for its declared value kind."""

    def __init__(self, kind: str, value: Any, original_error: Exception):
        self.kind = kind
        self.value = value
        self.original_error = original_error
        super().__init__(f"Cannot convert {value!r} as '{kind}': {original_error}")


class UnknownValueKindError(BindingError):
    """Raised when a binding names a value kind that is not registered."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown value kind '{kind}'")
