"""
Bindings: keep a model property and a target property synchronized.

A binding connects a property path on a model to one property of a target
(usually a UI control):

    spec = databind.bind(person, "addresses[1].street")
    binding = databind.Binding.attach(spec, street_field, "text")

Model to target: whenever any link of the path changes, the binding
re-reads the path, formats the value for its value kind and writes it into
the target. An absent path writes the target's empty value.

Target to model (bidirectional bindings only): whenever the target reports
a change of the bound property, the binding parses the target value and
writes it into the object at the end of the path. Nothing is written while
a link of the path is absent.

Computed bindings bind a read-only property and name the paths it depends
on; the getter is re-read whenever one of those paths changes:

    databind.bind(person, "age", "int", computed_by="year_of_birth")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .absent import is_absent
from .accessor import PropertyAccessor, Subscription, default_accessor
from .chain import ObserverChain
from .conversion import Converter, ConverterRegistry, default_registry
from .exceptions import NotObservableError, UnsupportedIndexError
from .parser import PropertyPath, resolve_value

logger = logging.getLogger(__name__)

# Type aliases
ErrorHandler = Callable[[Exception, str], None]
PathLike = Union[str, PropertyPath]


class Direction(str, Enum):
    """Which way values flow through a binding."""

    MODEL_TO_TARGET = "model_to_target"
    BIDIRECTIONAL = "bidirectional"


class BindingOptions(BaseModel):
    """
    Options of one binding.

    Attributes:
        value_kind: Converter registry key (e.g. "int")
        computed_by: Dependency paths of a computed property, root-relative
        direction: Flow direction; None picks bidirectional when the target
            reports changes of the bound property, model-to-target otherwise
        on_error: Called with (error, context) for errors raised while the
            binding propagates a change
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value_kind: str = "identity"
    computed_by: Tuple[PropertyPath, ...] = ()
    direction: Optional[Direction] = None
    on_error: Optional[Callable[[Exception, str], None]] = None

    @field_validator("value_kind", mode="before")
    @classmethod
    def _default_kind(cls, value: Any) -> Any:
        return "identity" if value is None else value

    @field_validator("computed_by", mode="before")
    @classmethod
    def _coerce_paths(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (str, PropertyPath)):
            value = [value]
        return tuple(PropertyPath.coerce(path) for path in value)

    @model_validator(mode="after")
    def _computed_is_read_only(self) -> BindingOptions:
        if self.computed_by and self.direction is Direction.BIDIRECTIONAL:
            raise ValueError("computed bindings cannot be bidirectional")
        return self

    @property
    def is_computed(self) -> bool:
        return bool(self.computed_by)


@dataclass(frozen=True)
class BindingSpec:
    """
    A binding waiting for its target.

    Produced by bind(); the code that builds the target supplies the target
    and its property through attach().
    """
    model: Any
    path: PropertyPath
    options: BindingOptions

    def attach(self, target: Any, target_property: str) -> Binding:
        return Binding.attach(self, target, target_property)


def bind(
    model: Any,
    path: PathLike,
    value_kind: Optional[str] = None,
    *,
    computed_by: Union[PathLike, Sequence[PathLike], None] = None,
    direction: Union[Direction, str, None] = None,
    on_error: Optional[ErrorHandler] = None,
) -> BindingSpec:
    """
    Describe a binding to a model property.

    Args:
        model: The root object the path starts from
        path: Path expression such as "addresses[0].street"
        value_kind: Converter registry key, e.g. "int"
        computed_by: Dependency path(s) of a read-only computed property
        direction: "model_to_target" or "bidirectional"; default automatic
        on_error: Handler for errors raised while propagating changes

    Raises:
        InvalidPathError: If path or a dependency path is malformed
    """
    return BindingSpec(
        model=model,
        path=PropertyPath.coerce(path),
        options=BindingOptions(
            value_kind=value_kind,
            computed_by=computed_by,
            direction=direction,
            on_error=on_error,
        ),
    )


class Binding:
    """
    One model path synchronized with one target property.

    Bindings are live from construction until dispose(). A target that
    offers an on_dispose(callback) hook disposes its bindings itself when
    it is torn down.
    """

    def __init__(
        self,
        model: Any,
        path: PathLike,
        target: Any,
        target_property: str,
        options: Optional[BindingOptions] = None,
        *,
        accessor: Optional[PropertyAccessor] = None,
        registry: Optional[ConverterRegistry] = None,
    ):
        self.model = model
        self.path = PropertyPath.coerce(path)
        self.target = target
        self.target_property = target_property
        self.options = options or BindingOptions()
        self._accessor = accessor or default_accessor
        self.converter: Converter = (registry or default_registry).get(self.options.value_kind)
        self.on_error = self.options.on_error

        self._updating = False  # Prevent feedback loops
        self._disposed = False
        self._chains: List[ObserverChain] = []
        self._target_subscription: Optional[Subscription] = None
        self._dispose_handle: Any = None
        self.direction = Direction.MODEL_TO_TARGET

        try:
            self.direction = self._resolve_direction()
            for dependency in self._watched_paths():
                self._chains.append(ObserverChain(
                    model,
                    dependency,
                    on_change=self._on_model_change,
                    on_error=self._on_chain_error,
                    accessor=self._accessor,
                ))
            if self.direction is Direction.BIDIRECTIONAL:
                self._target_subscription = self._accessor.observe(
                    target, target_property, self._on_target_change
                )
            self.update_target()
        except Exception:
            self.dispose()
            raise

        # A handle returned by the hook is cancelled in dispose()
        hook = getattr(target, "on_dispose", None)
        if callable(hook):
            self._dispose_handle = hook(self.dispose)

        logger.debug("Attached %r", self)

    @classmethod
    def attach(cls, spec: BindingSpec, target: Any, target_property: str) -> Binding:
        """Create the binding described by spec for a concrete target."""
        return cls(spec.model, spec.path, target, target_property, spec.options)

    def __repr__(self) -> str:
        arrow = "<->" if self.direction is Direction.BIDIRECTIONAL else "->"
        return (
            f"Binding({type(self.model).__name__}.{self.path} {arrow} "
            f"{type(self.target).__name__}.{self.target_property})"
        )

    def _resolve_direction(self) -> Direction:
        observable = self._accessor.supports_observer(self.target, self.target_property)
        requested = self.options.direction
        if requested is None:
            if observable and not self.is_computed:
                return Direction.BIDIRECTIONAL
            return Direction.MODEL_TO_TARGET
        if requested is Direction.BIDIRECTIONAL and not observable:
            raise NotObservableError(self.target, self.target_property)
        return requested

    def _watched_paths(self) -> Tuple[PropertyPath, ...]:
        # A computed getter has no setter to watch; its dependencies stand in for it.
        if self.is_computed:
            return self.options.computed_by
        return (self.path,)

    # Inspection

    @property
    def is_computed(self) -> bool:
        return self.options.is_computed

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def chains(self) -> List[ObserverChain]:
        return list(self._chains)

    def subscriptions(self) -> List[Subscription]:
        """Every active subscription the binding holds, model side first."""
        subs = [sub for chain in self._chains for sub in chain.subscriptions()]
        if self._target_subscription is not None and self._target_subscription.active:
            subs.append(self._target_subscription)
        return subs

    def read_model(self) -> Any:
        """
        The current model value, or ABSENT.

        For computed bindings this calls the getter on whatever object the
        path prefix reaches now.
        """
        return resolve_value(self.model, self.path, self._accessor)

    # Model -> target

    def update_target(self) -> None:
        """Push the current model value into the target."""
        if self._disposed or self._updating:
            return
        value = self.read_model()
        if is_absent(value):
            display = self._accessor.empty_value(self.target, self.target_property)
        else:
            display = self.converter.to_target(value)
        self._write_target(display)

    def _write_target(self, value: Any) -> None:
        self._updating = True
        try:
            self._accessor.set(self.target, self.target_property, value)
        finally:
            self._updating = False

    def _on_model_change(self) -> None:
        if self._disposed or self._updating:
            return
        # Runs inside the model setter; errors stay in this binding
        try:
            self.update_target()
        except Exception as e:
            self._report(e, "updating target")
            self._clear_target()

    def _on_chain_error(self, error: Exception) -> None:
        self._report(error, "rebuilding observers")
        self._clear_target()

    def _clear_target(self) -> None:
        if self._disposed:
            return
        try:
            self._write_target(self._accessor.empty_value(self.target, self.target_property))
        except Exception as e:
            self._report(e, "clearing target")

    # Target -> model

    def update_model(self) -> bool:
        """
        Write the target value into the model.

        Returns False when nothing was written because a link of the path
        is absent, the index is out of range, or the binding is computed or
        disposed.
        """
        if self._disposed or self.is_computed:
            return False

        value = self.converter.to_model(
            self._accessor.get(self.target, self.target_property)
        )
        owner = resolve_value(self.model, self.path.parent, self._accessor)
        if is_absent(owner):
            return False

        last = self.path.last
        self._updating = True
        try:
            if not last.is_indexed:
                self._accessor.set(owner, last.name, value)
                return True
            container = self._accessor.get(owner, last.name)
            if container is None:
                return False
            if not self._accessor.is_sequence(container):
                raise UnsupportedIndexError(owner, last.name, container)
            return self._accessor.set_item(owner, last.name, container, last.index, value)
        finally:
            self._updating = False

    def _on_target_change(self, value: Any) -> None:
        if self._disposed or self._updating:
            return
        try:
            self.update_model()
        except Exception as e:
            self._report(e, "updating model")

    # Errors

    def _report(self, error: Exception, context: str) -> None:
        logger.warning("%r: error %s: %s", self, context, error)
        if self.on_error is not None:
            self.on_error(error, context)

    # Teardown

    def dispose(self) -> None:
        """
        Remove every observer this binding registered.

        Safe to call more than once, and after the target is gone.
        """
        if self._disposed:
            return
        self._disposed = True
        for chain in self._chains:
            chain.dispose()
        self._chains.clear()
        if self._target_subscription is not None:
            self._target_subscription.cancel()
            self._target_subscription = None
        handle, self._dispose_handle = self._dispose_handle, None
        cancel = getattr(handle, "cancel", None)
        if callable(cancel):
            cancel()
        logger.debug("Disposed %r", self)
