"""
Tests for value kinds, formatters and parsers.
"""

import math

import pytest

from databind import (
    ConversionError,
    ConverterRegistry,
    UnknownValueKindError,
    bool_parser,
    default_formatter,
    default_registry,
    float_parser,
    int_parser,
    str_parser,
)


class TestFormattersAndParsers:
    """Test the formatter and parser functions."""

    def test_default_formatter_int(self):
        assert default_formatter(42) == "42"

    def test_default_formatter_float(self):
        assert default_formatter(3.14159) == "3.14159"

    def test_default_formatter_float_as_int(self):
        assert default_formatter(5.0) == "5"

    def test_default_formatter_infinite_float(self):
        assert default_formatter(math.inf) == "inf"

    def test_default_formatter_string(self):
        assert default_formatter("hello") == "hello"

    def test_default_formatter_none(self):
        assert default_formatter(None) == ""

    def test_float_parser_valid(self):
        assert float_parser("3.14") == 3.14

    def test_float_parser_int(self):
        assert float_parser("42") == 42.0

    def test_float_parser_empty(self):
        assert float_parser("") == 0.0

    def test_float_parser_whitespace(self):
        assert float_parser("  ") == 0.0

    def test_int_parser_valid(self):
        assert int_parser("42") == 42

    def test_int_parser_float_string(self):
        assert int_parser("3.7") == 3

    def test_int_parser_empty(self):
        assert int_parser("") == 0

    def test_int_parser_number(self):
        assert int_parser(7.0) == 7

    def test_str_parser(self):
        assert str_parser("hello world") == "hello world"
        assert str_parser(None) == ""
        assert str_parser(12) == "12"

    @pytest.mark.parametrize("text,expected", [
        ("true", True), ("Yes", True), ("1", True),
        ("false", False), ("off", False), ("", False),
    ])
    def test_bool_parser_words(self, text, expected):
        assert bool_parser(text) is expected

    def test_bool_parser_rejects_other_text(self):
        with pytest.raises(ValueError):
            bool_parser("maybe")


class TestRegistry:
    """Test lookup of converters by value kind."""

    def test_default_kinds(self):
        for kind in ("identity", "str", "int", "fixnum", "float", "bool"):
            assert kind in default_registry

    def test_fixnum_is_int(self):
        assert default_registry.get("fixnum") is default_registry.get("int")

    def test_identity_passes_through(self):
        value = object()
        converter = default_registry.get("identity")
        assert converter.to_target(value) is value
        assert converter.to_model(value) is value

    def test_int_round_trip(self):
        converter = default_registry.get("int")
        assert converter.to_target(27) == "27"
        assert converter.to_model("27") == 27

    def test_unknown_kind(self):
        with pytest.raises(UnknownValueKindError) as exc_info:
            default_registry.get("roman")
        assert exc_info.value.kind == "roman"

    def test_parse_failure_wraps_error(self):
        converter = default_registry.get("int")
        with pytest.raises(ConversionError) as exc_info:
            converter.to_model("abc")
        assert exc_info.value.kind == "int"
        assert exc_info.value.value == "abc"
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_register_custom_kind(self):
        registry = ConverterRegistry.with_defaults()
        registry.register("upper", str.lower, str.upper, aliases=("shout",))

        assert registry.get("shout").to_target("hi") == "HI"
        assert registry.get("upper").to_model("HI") == "hi"
        assert "upper" not in default_registry

    def test_kinds_listed(self):
        registry = ConverterRegistry()
        registry.register("b", str, str)
        registry.register("a", str, str)
        assert registry.kinds() == ["a", "b"]
