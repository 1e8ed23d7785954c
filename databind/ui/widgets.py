"""
Pre-bound Tkinter widgets.

Each widget accepts a BindingSpec for any of its bindable properties and
attaches it on construction, so a form reads like the model it shows:

    BoundLabel(frame, text=bind(person, "name"))
    BoundEntry(frame, text=bind(person, "addresses[0].street"))
    BoundCheckbutton(frame, selection=bind(person, "adult"))
    BoundSpinbox(frame, selection=bind(person, "age", "int"), from_=0, to=120)

Bindings are disposed when the widget is destroyed.
"""

from __future__ import annotations

import tkinter as tk
from typing import Any, Dict, List

from ..binding import Binding, BindingSpec
from .targets import WidgetTarget


class BoundWidgetMixin:
    """Attaches BindingSpec keyword arguments to the widget's properties."""

    target: WidgetTarget
    bindings: List[Binding]

    @staticmethod
    def _pop_specs(kwargs: Dict[str, Any]) -> Dict[str, BindingSpec]:
        specs = {}
        for name in WidgetTarget.PROPERTIES:
            if isinstance(kwargs.get(name), BindingSpec):
                specs[name] = kwargs.pop(name)
        return specs

    def _attach(self, specs: Dict[str, BindingSpec]) -> None:
        self.target = WidgetTarget(self)
        self.bindings = [
            spec.attach(self.target, name) for name, spec in specs.items()
        ]


class BoundLabel(BoundWidgetMixin, tk.Label):
    """
    A Label with one-way bindings.

    Example:
        label = BoundLabel(parent, text=bind(person, "name"))
        label.pack()
    """

    def __init__(self, master: tk.Widget, **kwargs: Any):
        specs = self._pop_specs(kwargs)
        super().__init__(master, **kwargs)
        self._attach(specs)


class BoundEntry(BoundWidgetMixin, tk.Entry):
    """
    An Entry whose text is bound in both directions.

    Example:
        entry = BoundEntry(parent, text=bind(person, "age", "int"))
        entry.pack()
    """

    def __init__(self, master: tk.Widget, **kwargs: Any):
        specs = self._pop_specs(kwargs)
        super().__init__(master, **kwargs)
        self._attach(specs)


class BoundCheckbutton(BoundWidgetMixin, tk.Checkbutton):
    """A Checkbutton whose selection is bound in both directions."""

    def __init__(self, master: tk.Widget, **kwargs: Any):
        specs = self._pop_specs(kwargs)
        super().__init__(master, **kwargs)
        self._attach(specs)


class BoundRadiobutton(BoundWidgetMixin, tk.Radiobutton):
    """A Radiobutton whose selection is bound in both directions."""

    def __init__(self, master: tk.Widget, **kwargs: Any):
        specs = self._pop_specs(kwargs)
        super().__init__(master, **kwargs)
        self._attach(specs)


class BoundSpinbox(BoundWidgetMixin, tk.Spinbox):
    """
    A Spinbox whose value is bound in both directions.

    Example:
        spinbox = BoundSpinbox(
            parent, selection=bind(person, "age", "int"),
            from_=0, to=120, increment=1
        )
        spinbox.pack()
    """

    def __init__(self, master: tk.Widget, **kwargs: Any):
        specs = self._pop_specs(kwargs)
        super().__init__(master, **kwargs)
        self._attach(specs)
