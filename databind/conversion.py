"""
Value conversion between model values and target representations.

A value kind names a pair of functions: format turns a model value into
what the target displays, parse turns what the target holds back into a
model value. Bindings pick a pair by kind:

    bind(person, "age", "int")      # 27 <-> "27"

Registered kinds:
- identity: no conversion in either direction
- str:      any value -> text, text -> text
- int:      (alias fixnum) integer <-> text
- float:    float <-> text
- bool:     boolean <-> boolean, accepting "true"/"false" style text

Callers may register more with register_converter().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from .exceptions import ConversionError, UnknownValueKindError

# Type aliases
Formatter = Callable[[Any], Any]
Parser = Callable[[Any], Any]


def identity(value: Any) -> Any:
    return value


def default_formatter(value: Any) -> str:
    """Default formatter: convert value to string."""
    if value is None:
        return ""
    if isinstance(value, float):
        # Format floats nicely
        if value.is_integer():
            return str(int(value))
        return f"{value:.6g}"
    return str(value)


def float_parser(text: Any) -> float:
    """Parse text as float, returning 0.0 for empty input."""
    if isinstance(text, (int, float)):
        return float(text)
    text = str(text).strip()
    if not text:
        return 0.0
    return float(text)


def int_parser(text: Any) -> int:
    """Parse text as int, returning 0 for empty input."""
    if isinstance(text, (int, float)):
        return int(text)
    text = str(text).strip()
    if not text:
        return 0
    return int(float(text))  # Allow "3.0" -> 3


def str_parser(text: Any) -> str:
    """Parse text as string."""
    if text is None:
        return ""
    return text if isinstance(text, str) else str(text)


_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0", ""})


def bool_parser(value: Any) -> bool:
    """Parse a boolean, accepting the usual true/false words for text."""
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


@dataclass(frozen=True)
class Converter:
    """A parse/format pair registered under a value kind."""
    kind: str
    parse: Parser
    format: Formatter

    def to_target(self, value: Any) -> Any:
        try:
            return self.format(value)
        except (TypeError, ValueError) as e:
            raise ConversionError(self.kind, value, e) from e

    def to_model(self, value: Any) -> Any:
        try:
            return self.parse(value)
        except (TypeError, ValueError) as e:
            raise ConversionError(self.kind, value, e) from e


class ConverterRegistry:
    """Mapping of value kind -> Converter."""

    def __init__(self):
        self._converters: Dict[str, Converter] = {}

    @classmethod
    def with_defaults(cls) -> ConverterRegistry:
        registry = cls()
        registry.register("identity", identity, identity)
        registry.register("str", str_parser, default_formatter)
        registry.register("int", int_parser, default_formatter, aliases=("fixnum",))
        registry.register("float", float_parser, default_formatter)
        registry.register("bool", bool_parser, bool)
        return registry

    def register(
        self,
        kind: str,
        parse: Parser,
        format: Formatter,
        aliases: Iterable[str] = (),
    ) -> Converter:
        """Register (or replace) the converter for kind and its aliases."""
        converter = Converter(kind, parse, format)
        self._converters[kind] = converter
        for alias in aliases:
            self._converters[alias] = converter
        return converter

    def get(self, kind: str) -> Converter:
        try:
            return self._converters[kind]
        except KeyError:
            raise UnknownValueKindError(kind) from None

    def kinds(self) -> List[str]:
        return sorted(self._converters)

    def __contains__(self, kind: object) -> bool:
        return kind in self._converters


default_registry = ConverterRegistry.with_defaults()


def register_converter(
    kind: str,
    parse: Parser,
    format: Formatter,
    aliases: Iterable[str] = (),
) -> Converter:
    """Register a value kind with the process-wide registry."""
    return default_registry.register(kind, parse, format, aliases)
