"""
Property path parsing and resolution.

A property path describes how to reach a value from a root object:

    "name"                  -> person.name
    "address1.street"       -> person.address1.street
    "addresses[1].street"   -> person.addresses[1].street

Grammar:
    path    = segment ("." segment)*
    segment = name ["[" index "]"]
    name    = Python identifier
    index   = non-negative integer literal

Resolution never raises for missing links: a None intermediate object or an
out-of-range index yields ABSENT, the "unset" state bindings display as an
empty target.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union, overload

from .absent import ABSENT, is_absent
from .accessor import PropertyAccessor, default_accessor
from .exceptions import InvalidPathError, UnsupportedIndexError

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_INDEX_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Segment:
    """
    One step of a property path.

    Attributes:
        name: The property read on the current object
        index: Element index into the property's value, for indexed segments
    """
    name: str
    index: Optional[int] = None

    @property
    def is_indexed(self) -> bool:
        return self.index is not None

    def __str__(self) -> str:
        if self.index is None:
            return self.name
        return f"{self.name}[{self.index}]"


@dataclass(frozen=True)
class PropertyPath:
    """An immutable sequence of segments. Equal paths have equal segments."""
    segments: Tuple[Segment, ...]

    @classmethod
    def parse(cls, expression: str) -> PropertyPath:
        return parse_path(expression)

    @classmethod
    def coerce(cls, value: Union[str, PropertyPath]) -> PropertyPath:
        """Accept either a path or a path expression."""
        if isinstance(value, PropertyPath):
            return value
        if isinstance(value, str):
            return parse_path(value)
        raise TypeError(f"Expected a property path or path expression, got {type(value).__name__}")

    @property
    def parent(self) -> PropertyPath:
        """The path without its last segment (empty for single-segment paths)."""
        return PropertyPath(self.segments[:-1])

    @property
    def last(self) -> Segment:
        return self.segments[-1]

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    @overload
    def __getitem__(self, index: int) -> Segment: ...

    @overload
    def __getitem__(self, index: slice) -> PropertyPath: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return PropertyPath(self.segments[index])
        return self.segments[index]

    def __str__(self) -> str:
        return ".".join(str(segment) for segment in self.segments)


@functools.lru_cache(maxsize=512)
def parse_path(expression: str) -> PropertyPath:
    """
    Parse a path expression.

    Raises:
        InvalidPathError: If the expression does not match the grammar
    """
    if not isinstance(expression, str):
        raise TypeError(f"Path expression must be a string, got {type(expression).__name__}")

    text = expression.strip()
    if not text:
        raise InvalidPathError(expression, 0, "empty path")

    segments = []
    pos = 0
    end = len(text)

    while True:
        match = _NAME_RE.match(text, pos)
        if match is None:
            raise InvalidPathError(text, pos, "expected a property name")
        name = match.group()
        pos = match.end()

        index = None
        if pos < end and text[pos] == "[":
            close = text.find("]", pos + 1)
            if close == -1:
                raise InvalidPathError(text, pos, "unmatched '['")
            literal = text[pos + 1:close]
            if not _INDEX_RE.fullmatch(literal):
                raise InvalidPathError(
                    text, pos + 1, f"index must be a non-negative integer, got {literal!r}"
                )
            index = int(literal)
            pos = close + 1

        segments.append(Segment(name, index))

        if pos == end:
            break
        if text[pos] != ".":
            raise InvalidPathError(text, pos, f"unexpected character {text[pos]!r}")
        pos += 1

    return PropertyPath(tuple(segments))


def resolve_segment(owner: Any, segment: Segment, accessor: Optional[PropertyAccessor] = None) -> Any:
    """
    Read one segment from owner.

    Raises:
        NoSuchPropertyError: If owner has no such property
        UnsupportedIndexError: If an indexed segment's value is not a sequence
    """
    accessor = accessor or default_accessor
    value = accessor.get(owner, segment.name)
    if not segment.is_indexed:
        return value
    if value is None:
        return ABSENT
    if not accessor.is_sequence(value):
        raise UnsupportedIndexError(owner, segment.name, value)
    return accessor.get_item(value, segment.index)


def resolve_value(root: Any, path: PropertyPath, accessor: Optional[PropertyAccessor] = None) -> Any:
    """
    Walk path from root and return the value it reaches.

    Returns ABSENT if the root or any intermediate object is None, or an
    indexed segment is out of range. A terminal None is returned as None.
    """
    accessor = accessor or default_accessor
    value = root
    for segment in path:
        if is_absent(value):
            return ABSENT
        value = resolve_segment(value, segment, accessor)
    return value
