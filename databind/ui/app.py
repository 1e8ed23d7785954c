"""
BindingApp: application shell for data-bound Tkinter UIs.
"""

from __future__ import annotations

import logging
import tkinter as tk
from typing import Dict, List, Optional

from ..binding import Binding, BindingSpec
from .targets import WidgetTarget

logger = logging.getLogger(__name__)


class BindingApp:
    """
    Main application class owning a Tk root and the bindings made through it.

    BindingApp provides:
    - One WidgetTarget per widget, shared by all bindings on that widget
    - Convenient binding creation
    - Disposal of every binding when the application is destroyed

    Example:
        app = BindingApp("Address Book")

        person = Person()

        entry = tk.Entry(app.root)
        app.bind(databind.bind(person, "address1.street"), entry, "text")

        label = tk.Label(app.root)
        app.bind(databind.bind(person, "age", "int", computed_by="year_of_birth"), label, "text")

        app.run()
    """

    def __init__(
        self,
        title: str = "databind",
        width: int = 400,
        height: int = 300,
        root: Optional[tk.Tk] = None,
    ):
        """
        Initialize the application.

        Args:
            title: Window title
            width: Initial window width
            height: Initial window height
            root: Optional existing Tk root (creates new one if None)
        """
        if root is not None:
            self.root = root
            self._owns_root = False
        else:
            self.root = tk.Tk()
            self._owns_root = True

        self.root.title(title)
        self.root.geometry(f"{width}x{height}")

        self._bindings: List[Binding] = []
        self._targets: Dict[str, WidgetTarget] = {}
        self._running = False

    def target_for(self, widget: tk.Widget) -> WidgetTarget:
        """The WidgetTarget wrapping widget, created on first use."""
        key = str(widget)
        target = self._targets.get(key)
        if target is None or target.widget is not widget or target.destroyed:
            target = WidgetTarget(widget)
            self._targets[key] = target
            target.on_dispose(lambda: self._forget_target(key, target))
        return target

    def bind(self, spec: BindingSpec, widget: tk.Widget, widget_property: str) -> Binding:
        """
        Attach a binding spec to one property of a widget.

        Args:
            spec: Result of databind.bind()
            widget: The Tkinter widget to bind
            widget_property: "text", "selection" or "enabled"

        Returns:
            The created Binding
        """
        binding = spec.attach(self.target_for(widget), widget_property)
        self._bindings.append(binding)
        return binding

    def run(self) -> None:
        """
        Start the application main loop.

        This blocks until the window is closed.
        """
        self._running = True
        try:
            self.root.mainloop()
        finally:
            self._running = False

    def quit(self) -> None:
        """Stop the application and close the window."""
        self._running = False
        self.root.quit()

    def destroy(self) -> None:
        """Destroy the application and dispose of its bindings."""
        for binding in self._bindings:
            binding.dispose()
        self._bindings.clear()

        if self._owns_root:
            self.root.destroy()

    @property
    def bindings(self) -> List[Binding]:
        """All live bindings made through the application."""
        self._bindings = [b for b in self._bindings if not b.disposed]
        return self._bindings.copy()

    def remove_binding(self, binding: Binding) -> bool:
        """
        Dispose a binding and forget it.

        Returns:
            True if the binding was found and removed
        """
        try:
            self._bindings.remove(binding)
        except ValueError:
            return False
        binding.dispose()
        return True

    def _forget_target(self, key: str, target: WidgetTarget) -> None:
        if self._targets.get(key) is target:
            del self._targets[key]
        logger.debug("Widget %s destroyed", key)
