"""
databind - the data-binding engine of a desktop UI DSL.

This package provides:
- Observable models whose attribute writes notify observers
- Property paths with nesting and indexing ("addresses[1].street")
- Observer chains that re-wire themselves as the object graph changes
- Bindings that keep a model path and a target property synchronized,
  one-way or in both directions, with value conversion
- Computed bindings driven by explicitly declared dependency paths

Basic Usage:
    import databind

    class Address(databind.Observable):
        def __init__(self, street=None):
            self.street = street

    class Person(databind.Observable):
        def __init__(self):
            self.address1 = Address("20 Naper Ave")
            self.year_of_birth = 1985

        @property
        def age(self):
            return datetime.date.today().year - self.year_of_birth

    person = Person()
    street_field = TextField()       # any Observable with a "text" property

    binding = databind.bind(person, "address1.street").attach(street_field, "text")
    street_field.text                # "20 Naper Ave"

    person.address1 = Address("101 Confession St")
    street_field.text                # "101 Confession St"

    street_field.text = "123 Main St"
    person.address1.street           # "123 Main St"

    binding.dispose()                # removes every observer it registered

Key Concepts:
    - Observable: Base class for bindable models
    - ObservableList: List that reports structural changes
    - PropertyPath: Parsed path expression
    - ObserverChain: Live subscriptions along a path
    - Binding: One synchronized model path / target property pair
    - bind(): Describe a binding; attach it to a target later
    - ABSENT: What an unresolvable path reads as
"""

from .absent import ABSENT, is_absent
from .accessor import (
    PropertyAccessor,
    Subscription,
    SupportsChangeObservers,
    SupportsPropertyObservers,
    default_accessor,
)
from .binding import Binding, BindingOptions, BindingSpec, Direction, bind
from .chain import ChainNode, ObserverChain
from .collection import ListChange, ListChangeKind, ObservableList
from .conversion import (
    Converter,
    ConverterRegistry,
    bool_parser,
    default_formatter,
    default_registry,
    float_parser,
    int_parser,
    register_converter,
    str_parser,
)
from .exceptions import (
    BindingError,
    ConversionError,
    InvalidPathError,
    NoSuchPropertyError,
    NotObservableError,
    UnknownValueKindError,
    UnsupportedIndexError,
)
from .model import Observable
from .observers import PropertyObservers
from .parser import PropertyPath, Segment, parse_path, resolve_segment, resolve_value

__version__ = "0.1.0"

__all__ = [
    # Models
    "Observable",
    "ObservableList",
    "ListChange",
    "ListChangeKind",
    "PropertyObservers",
    # Paths
    "PropertyPath",
    "Segment",
    "parse_path",
    "resolve_value",
    "resolve_segment",
    "ABSENT",
    "is_absent",
    # Access
    "PropertyAccessor",
    "Subscription",
    "SupportsPropertyObservers",
    "SupportsChangeObservers",
    "default_accessor",
    # Chains
    "ObserverChain",
    "ChainNode",
    # Bindings
    "Binding",
    "BindingOptions",
    "BindingSpec",
    "Direction",
    "bind",
    # Conversion
    "Converter",
    "ConverterRegistry",
    "default_registry",
    "register_converter",
    "default_formatter",
    "int_parser",
    "float_parser",
    "str_parser",
    "bool_parser",
    # Exceptions
    "BindingError",
    "InvalidPathError",
    "NoSuchPropertyError",
    "UnsupportedIndexError",
    "NotObservableError",
    "ConversionError",
    "UnknownValueKindError",
]
