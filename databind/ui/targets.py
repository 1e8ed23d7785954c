"""
Tkinter widgets as binding targets.

WidgetTarget adapts a Tk widget to the property/observer interface the
binding engine consumes. It exposes three bindable properties:

- text:      Entry, Spinbox (observable), Label, Button, Message
- selection: Checkbutton, Radiobutton, Scale, Spinbox (observable)
- enabled:   any widget with a state option (not observable)

Observable properties are backed by a Tk variable attached to the widget, so
user edits arrive through variable traces. Destroying the widget fires the
on_dispose callbacks, which is how bindings learn that their target is gone.
"""

from __future__ import annotations

import logging
import tkinter as tk
from typing import Any, Callable, Dict, Optional

from ..accessor import Subscription
from ..exceptions import NoSuchPropertyError, NotObservableError
from ..observers import PropertyObservers

logger = logging.getLogger(__name__)

# Widgets whose text the user can edit
_EDITABLE_TEXT = (tk.Entry, tk.Spinbox)
# Widgets with a selection value, and the option that holds its variable
_SELECTION_OPTION = {
    tk.Checkbutton: "variable",
    tk.Radiobutton: "variable",
    tk.Scale: "variable",
    tk.Spinbox: "textvariable",
}


class WidgetTarget:
    """A Tk widget seen through the property/observer interface."""

    PROPERTIES = ("text", "selection", "enabled")

    def __init__(self, widget: tk.Widget):
        self.widget = widget
        self._variables: Dict[str, tk.Variable] = {}
        self._observers: Dict[str, PropertyObservers] = {}
        self._traces: Dict[str, str] = {}
        self._dispose_callbacks = PropertyObservers()
        self._destroyed = False
        widget.bind("<Destroy>", self._on_destroy, add="+")

    def __repr__(self) -> str:
        return f"WidgetTarget({self.widget!r})"

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # Bindable properties

    @property
    def text(self) -> str:
        if isinstance(self.widget, _EDITABLE_TEXT):
            return self._variable("text").get()
        return str(self.widget.cget("text"))

    @text.setter
    def text(self, value: Any) -> None:
        value = "" if value is None else str(value)
        if isinstance(self.widget, _EDITABLE_TEXT):
            self._variable("text").set(value)
        else:
            self.widget.configure(text=value)

    @property
    def selection(self) -> Any:
        return self._variable("selection").get()

    @selection.setter
    def selection(self, value: Any) -> None:
        variable = self._variable("selection")
        if isinstance(variable, tk.BooleanVar):
            value = bool(value)
        elif isinstance(variable, tk.DoubleVar):
            value = float(value or 0)
        variable.set(value)

    @property
    def enabled(self) -> bool:
        return str(self.widget.cget("state")) != tk.DISABLED

    @enabled.setter
    def enabled(self, value: Any) -> None:
        self.widget.configure(state=tk.NORMAL if value else tk.DISABLED)

    def empty_value(self, name: str) -> Any:
        if name == "selection":
            variable = self._variable("selection")
            if isinstance(variable, tk.BooleanVar):
                return False
            if isinstance(variable, tk.DoubleVar):
                return 0.0
        if name == "enabled":
            return False
        return ""

    # Observer interface

    def supports_property_observer(self, name: str) -> bool:
        if name == "text":
            return isinstance(self.widget, _EDITABLE_TEXT)
        if name == "selection":
            return self._selection_option() is not None
        return False

    def add_property_observer(self, name: str, callback: Callable[[Any], None]) -> int:
        if not self.supports_property_observer(name):
            raise NotObservableError(self, name)
        observers = self._observers.get(name)
        if observers is None:
            observers = self._observers[name] = PropertyObservers()
            variable = self._variable(name)
            self._traces[name] = variable.trace_add(
                "write", lambda *_args, prop=name: self._on_variable_write(prop)
            )
        return observers.add(callback)

    def remove_property_observer(self, name: str, observer_id: int) -> bool:
        observers = self._observers.get(name)
        if observers is None:
            return False
        removed = observers.remove(observer_id)
        if not observers:
            del self._observers[name]
            trace = self._traces.pop(name, None)
            if trace is not None:
                try:
                    self._variables[name].trace_remove("write", trace)
                except tk.TclError:
                    # Interpreter already gone
                    logger.debug("Trace for %s of %r outlived its interpreter", name, self)
        return removed

    def on_dispose(self, callback: Callable[[], None]) -> Subscription:
        """
        Call callback once, when the widget is destroyed.

        Returns a subscription whose cancel() unregisters the callback.
        """
        if self._destroyed:
            callback()
            return Subscription(self, None)
        callbacks = self._dispose_callbacks
        observer_id = callbacks.add(callback)
        return Subscription(self, None, observer_id, lambda: callbacks.remove(observer_id))

    def dispose_callback_count(self) -> int:
        return len(self._dispose_callbacks)

    # Internals

    def _selection_option(self) -> Optional[str]:
        for widget_type, option in _SELECTION_OPTION.items():
            if isinstance(self.widget, widget_type):
                return option
        return None

    def _variable(self, name: str) -> tk.Variable:
        """The Tk variable backing a property, attached on first use."""
        variable = self._variables.get(name)
        if variable is not None:
            return variable

        if name == "text" and isinstance(self.widget, _EDITABLE_TEXT):
            option = "textvariable"
        elif name == "selection":
            option = self._selection_option()
        else:
            option = None
        if option is None:
            raise NoSuchPropertyError(self, name, f"{type(self.widget).__name__} has no '{name}' variable")

        # Spinbox text and selection share the one text variable
        if isinstance(self.widget, tk.Spinbox) and option == "textvariable":
            shared = self._variables.get("selection" if name == "text" else "text")
            if shared is not None:
                self._variables[name] = shared
                return shared

        if isinstance(self.widget, (tk.Checkbutton, tk.Radiobutton)):
            variable = tk.BooleanVar(master=self.widget)
            if isinstance(self.widget, tk.Radiobutton):
                self.widget.configure(value=True)
            else:
                self.widget.configure(onvalue=True, offvalue=False)
        elif isinstance(self.widget, tk.Scale):
            variable = tk.DoubleVar(master=self.widget, value=self.widget.get())
        else:
            variable = tk.StringVar(master=self.widget, value=self.widget.get())

        self.widget.configure(**{option: variable})
        self._variables[name] = variable
        return variable

    def _on_variable_write(self, name: str) -> None:
        observers = self._observers.get(name)
        if observers:
            observers.notify(getattr(self, name))

    def _on_destroy(self, event: tk.Event) -> None:
        # <Destroy> is also delivered for every child of the widget
        if event.widget is not self.widget or self._destroyed:
            return
        self._destroyed = True
        callbacks, self._dispose_callbacks = self._dispose_callbacks, PropertyObservers()
        callbacks.notify()
