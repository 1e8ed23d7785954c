"""
Tests for property path parsing and resolution.
"""

import pytest

import databind
from databind import ABSENT, PropertyPath, Segment, parse_path, resolve_value
from databind.exceptions import InvalidPathError, NoSuchPropertyError, UnsupportedIndexError

from sample_models import Address, PersonWithNestedIndexedProperties, PersonWithNestedProperties


class TestParsing:
    """Test the path grammar."""

    def test_single_name(self):
        assert parse_path("name").segments == (Segment("name"),)

    def test_nested_names(self):
        path = parse_path("address1.street")
        assert path.segments == (Segment("address1"), Segment("street"))

    def test_indexed_segment(self):
        path = parse_path("addresses[1].street")
        assert path.segments == (Segment("addresses", 1), Segment("street"))
        assert path[0].is_indexed
        assert not path[1].is_indexed

    def test_terminal_index(self):
        assert parse_path("names[0]").last == Segment("names", 0)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_path("  name ") == parse_path("name")

    def test_structural_equality(self):
        assert parse_path("a.b[2].c") == PropertyPath((Segment("a"), Segment("b", 2), Segment("c")))
        assert parse_path("a.b[2].c") != parse_path("a.b[3].c")

    def test_str_round_trips_expression(self):
        assert str(parse_path("addresses[10].street")) == "addresses[10].street"

    def test_parent_and_last(self):
        path = parse_path("addresses[0].street_count")
        assert path.parent == parse_path("addresses[0]")
        assert path.last == Segment("street_count")
        assert len(parse_path("name").parent) == 0

    def test_slicing_returns_path(self):
        path = parse_path("a.b.c")
        assert path[:2] == parse_path("a.b")

    def test_classmethods(self):
        path = PropertyPath.parse("a.b")
        assert PropertyPath.coerce(path) is path
        assert PropertyPath.coerce("a.b") == path

    def test_coerce_rejects_other_types(self):
        with pytest.raises(TypeError):
            PropertyPath.coerce(42)

    @pytest.mark.parametrize("expression", [
        "",
        "   ",
        ".name",
        "name.",
        "a..b",
        "names[",
        "names[0",
        "names]",
        "names[]",
        "names[x]",
        "names[-1]",
        "names[1.5]",
        "names[0][1]",
        "names[0]x",
        "1name",
        "a b",
    ])
    def test_malformed_paths(self, expression):
        with pytest.raises(InvalidPathError):
            parse_path(expression)

    def test_error_reports_position(self):
        with pytest.raises(InvalidPathError) as excinfo:
            parse_path("names[x]")
        assert excinfo.value.position == 6
        assert "non-negative integer" in excinfo.value.reason


class TestResolution:
    """Test walking paths against object graphs."""

    def test_plain_property(self):
        person = PersonWithNestedProperties()
        person.address1 = Address("20 Naper Ave")
        assert resolve_value(person, parse_path("address1.street")) == "20 Naper Ave"

    def test_absent_intermediate(self):
        person = PersonWithNestedProperties()
        assert resolve_value(person, parse_path("address1.street")) is ABSENT

    def test_terminal_none_is_not_absent(self):
        person = PersonWithNestedProperties()
        person.address1 = Address()
        assert resolve_value(person, parse_path("address1.street")) is None

    def test_none_root(self):
        assert resolve_value(None, parse_path("name")) is ABSENT

    def test_indexed_element(self):
        person = PersonWithNestedIndexedProperties()
        person.addresses = [Address("a"), Address("b")]
        assert resolve_value(person, parse_path("addresses[1].street")) == "b"

    def test_index_out_of_range_is_absent(self):
        person = PersonWithNestedIndexedProperties()
        person.addresses = [Address("a")]
        assert resolve_value(person, parse_path("addresses[1].street")) is ABSENT

    def test_none_collection_is_absent(self):
        person = PersonWithNestedIndexedProperties()
        assert resolve_value(person, parse_path("names[0]")) is ABSENT

    def test_missing_property_raises(self):
        person = PersonWithNestedProperties()
        person.address1 = Address()
        with pytest.raises(NoSuchPropertyError) as excinfo:
            resolve_value(person, parse_path("address1.country"))
        assert excinfo.value.name == "country"

    def test_unreached_segment_is_not_looked_up(self):
        person = PersonWithNestedProperties()
        # address1 is None, so "country" is never reached
        assert resolve_value(person, parse_path("address1.country")) is ABSENT

    def test_index_on_non_sequence_raises(self):
        person = PersonWithNestedProperties()
        person.address1 = Address()
        with pytest.raises(UnsupportedIndexError):
            resolve_value(person, parse_path("address1[0]"))

    def test_index_on_string_raises(self):
        person = PersonWithNestedProperties()
        person.address1 = Address("Main")
        with pytest.raises(UnsupportedIndexError):
            resolve_value(person, parse_path("address1.street[0]"))

    def test_plain_objects_resolve(self):
        class Plain:
            pass

        obj = Plain()
        obj.child = Plain()
        obj.child.value = 3
        assert databind.resolve_value(obj, parse_path("child.value")) == 3
