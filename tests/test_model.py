"""
Tests for observable models and observable lists.
"""

import copy

import pytest

import databind
from databind import ListChange, ListChangeKind, ObservableList

from sample_models import Address, Person, PersonWithComputedValues, PersonWithNestedIndexedProperties


class TestObservable:
    """Test property change notification on models."""

    def test_write_notifies_with_new_value(self):
        person = Person()
        seen = []
        person.add_property_observer("name", seen.append)

        person.name = "Bruce Ting"

        assert seen == ["Bruce Ting"]

    def test_equal_write_does_not_notify(self):
        person = Person()
        person.name = "Bruce Ting"
        seen = []
        person.add_property_observer("name", seen.append)

        person.name = "Bruce Ting"

        assert seen == []

    def test_observers_run_in_registration_order(self):
        person = Person()
        order = []
        person.add_property_observer("name", lambda v: order.append(1))
        person.add_property_observer("name", lambda v: order.append(2))
        person.add_property_observer("name", lambda v: order.append(3))

        person.name = "x"

        assert order == [1, 2, 3]

    def test_observer_only_sees_its_property(self):
        person = Person()
        seen = []
        person.add_property_observer("name", seen.append)

        person.age = 12

        assert seen == []

    def test_remove_observer(self):
        person = Person()
        seen = []
        observer_id = person.add_property_observer("name", seen.append)

        assert person.remove_property_observer("name", observer_id) is True
        assert person.remove_property_observer("name", observer_id) is False
        person.name = "x"

        assert seen == []
        assert person.observer_count("name") == 0

    def test_observer_removed_during_dispatch_is_skipped(self):
        person = Person()
        seen = []
        ids = {}

        def first(value):
            person.remove_property_observer("name", ids["second"])

        person.add_property_observer("name", first)
        ids["second"] = person.add_property_observer("name", seen.append)

        person.name = "x"

        assert seen == []

    def test_private_attributes_do_not_notify(self):
        person = Person()
        seen = []
        person.add_property_observer("_secret", seen.append)

        person._secret = 1

        assert seen == []

    def test_plain_list_becomes_observable(self):
        person = Person()
        person.name = ["a", "b"]

        assert isinstance(person.name, ObservableList)
        assert person.name == ["a", "b"]

    def test_equal_but_distinct_models_notify(self):
        """Observers attach to instances, so a distinct equal instance is a change."""

        class Point(databind.Observable):
            def __init__(self, x):
                self.x = x

            def __eq__(self, other):
                return isinstance(other, Point) and other.x == self.x

            __hash__ = None

        holder = Person()
        holder.name = Point(1)
        seen = []
        holder.add_property_observer("name", seen.append)

        holder.name = Point(1)

        assert len(seen) == 1

    def test_equal_but_distinct_lists_notify(self):
        person = Person()
        person.name = []
        seen = []
        person.add_property_observer("name", seen.append)

        person.name = []

        assert len(seen) == 1

    def test_observer_counts(self):
        address = Address()
        address.add_property_observer("street", print)
        address.add_property_observer("street", print)
        address.add_property_observer("city", print)

        assert address.observer_count("street") == 2
        assert address.observer_count() == 3
        assert sorted(address.observed_properties()) == ["city", "street"]
        assert address.property_observers("zip") == []

    def test_read_only_property_is_not_observable(self):
        person = PersonWithComputedValues()
        assert person.supports_property_observer("first_name")
        assert not person.supports_property_observer("name")

    def test_manual_notification(self):
        person = PersonWithComputedValues()
        person.first_name = "Marty"
        person.last_name = "McFly"
        seen = []
        person.add_property_observer("name", seen.append)

        person.notify_property_changed("name")

        assert seen == ["McFly, Marty"]

    def test_subclass_without_super_init(self):
        class Bare(databind.Observable):
            def __init__(self):
                self.value = 1

        bare = Bare()
        seen = []
        bare.add_property_observer("value", seen.append)
        bare.value = 2
        assert seen == [2]


class TestListChange:
    """Test which indices a change affects."""

    def test_set_affects_only_its_range(self):
        change = ListChange(ListChangeKind.SET, 1, 2)
        assert change.affects(1)
        assert not change.affects(0)
        assert not change.affects(2)

    @pytest.mark.parametrize("kind", [ListChangeKind.INSERT, ListChangeKind.DELETE, ListChangeKind.SPLICE])
    def test_shifting_changes_affect_later_indices(self, kind):
        change = ListChange(kind, 1, 2)
        assert not change.affects(0)
        assert change.affects(1)
        assert change.affects(5)

    @pytest.mark.parametrize("kind", [ListChangeKind.CLEAR, ListChangeKind.REORDER])
    def test_whole_list_changes_affect_everything(self, kind):
        change = ListChange(kind, 0, 3)
        assert change.affects(0)
        assert change.affects(10)


class TestObservableList:
    """Test structural change notification."""

    def setup_method(self):
        self.items = ObservableList(["a", "b", "c"])
        self.changes = []
        self.items.add_change_observer(self.changes.append)

    def test_append(self):
        self.items.append("d")
        assert self.changes == [ListChange(ListChangeKind.INSERT, 3, 4)]

    def test_extend(self):
        self.items.extend(["d", "e"])
        assert self.changes == [ListChange(ListChangeKind.INSERT, 3, 5)]

    def test_extend_with_nothing_is_silent(self):
        self.items.extend([])
        assert self.changes == []

    def test_iadd(self):
        self.items += ["d"]
        assert isinstance(self.items, ObservableList)
        assert self.changes == [ListChange(ListChangeKind.INSERT, 3, 4)]

    def test_insert(self):
        self.items.insert(1, "x")
        assert self.items == ["a", "x", "b", "c"]
        assert self.changes == [ListChange(ListChangeKind.INSERT, 1, 2)]

    def test_insert_negative_index(self):
        self.items.insert(-1, "x")
        assert self.items == ["a", "b", "x", "c"]
        assert self.changes == [ListChange(ListChangeKind.INSERT, 2, 3)]

    def test_set_item(self):
        self.items[1] = "x"
        assert self.changes == [ListChange(ListChangeKind.SET, 1, 2)]

    def test_set_item_negative_index(self):
        self.items[-1] = "x"
        assert self.changes == [ListChange(ListChangeKind.SET, 2, 3)]

    def test_set_equal_item_is_silent(self):
        self.items[1] = "b"
        assert self.changes == []

    def test_set_item_out_of_range(self):
        with pytest.raises(IndexError):
            self.items[5] = "x"
        assert self.changes == []

    def test_set_slice_same_length(self):
        self.items[0:2] = ["x", "y"]
        assert self.changes == [ListChange(ListChangeKind.SET, 0, 2)]

    def test_set_slice_different_length(self):
        self.items[0:1] = ["x", "y"]
        assert self.items == ["x", "y", "b", "c"]
        assert self.changes == [ListChange(ListChangeKind.SPLICE, 0, 1)]

    def test_delete_at_index(self):
        del self.items[1]
        assert self.changes == [ListChange(ListChangeKind.DELETE, 1, 2)]

    def test_delete_slice(self):
        del self.items[1:]
        assert self.items == ["a"]
        assert self.changes == [ListChange(ListChangeKind.DELETE, 1, 3)]

    def test_pop(self):
        assert self.items.pop() == "c"
        assert self.items.pop(0) == "a"
        assert self.changes == [
            ListChange(ListChangeKind.DELETE, 2, 3),
            ListChange(ListChangeKind.DELETE, 0, 1),
        ]

    def test_pop_empty(self):
        empty = ObservableList()
        with pytest.raises(IndexError):
            empty.pop()

    def test_remove_by_value(self):
        self.items.remove("b")
        assert self.items == ["a", "c"]
        assert self.changes == [ListChange(ListChangeKind.DELETE, 1, 2)]

    def test_remove_missing_value(self):
        with pytest.raises(ValueError):
            self.items.remove("z")
        assert self.changes == []

    def test_clear(self):
        self.items.clear()
        assert self.changes == [ListChange(ListChangeKind.CLEAR, 0, 3)]

    def test_clear_empty_is_silent(self):
        empty = ObservableList()
        seen = []
        empty.add_change_observer(seen.append)
        empty.clear()
        assert seen == []

    def test_sort_and_reverse(self):
        self.items.reverse()
        self.items.sort()
        assert [c.kind for c in self.changes] == [ListChangeKind.REORDER, ListChangeKind.REORDER]

    def test_remove_observer(self):
        other = []
        observer_id = self.items.add_change_observer(other.append)
        assert self.items.observer_count() == 2

        self.items.remove_change_observer(observer_id)
        self.items.append("d")

        assert other == []
        assert self.items.observer_count() == 1
        assert self.items.change_observers() == [self.changes.append]

    def test_notification_after_mutation(self):
        seen = []
        self.items.add_change_observer(lambda change: seen.append(list(self.items)))
        self.items.append("d")
        assert seen == [["a", "b", "c", "d"]]


class TestCopying:
    """Copies get observer registries of their own."""

    def test_copy_of_model_starts_unobserved(self):
        original = Address("20 Naper Ave")
        seen = []
        original.add_property_observer("street", seen.append)

        clone = copy.copy(original)
        clone.street = "written to the clone"

        assert seen == []
        assert clone.street == "written to the clone"
        assert original.street == "20 Naper Ave"
        assert clone.observer_count() == 0
        assert original.observer_count() == 1

        original.street = "101 Confession St"
        assert seen == ["101 Confession St"]

    def test_copy_of_list_starts_unobserved(self):
        items = ObservableList(["a", "b"])
        changes = []
        items.add_change_observer(changes.append)

        clone = copy.copy(items)
        clone.append("c")

        assert isinstance(clone, ObservableList)
        assert clone == ["a", "b", "c"]
        assert items == ["a", "b"]
        assert changes == []
        assert clone.observer_count() == 0

    def test_deepcopy_of_nested_model(self):
        person = PersonWithNestedIndexedProperties()
        person.addresses = [Address("1 First St")]
        seen = []
        person.addresses.add_change_observer(seen.append)
        person.addresses[0].add_property_observer("street", seen.append)

        clone = copy.deepcopy(person)
        clone.addresses[0].street = "changed"
        clone.addresses.append(Address("2 Second St"))

        assert seen == []
        assert isinstance(clone.addresses, ObservableList)
        assert clone.addresses[0] is not person.addresses[0]
        assert person.addresses[0].street == "1 First St"
        assert clone.observer_count() == 0
