"""
Tkinter boundary for the binding engine.

Tk widgets become binding targets through WidgetTarget; the Bound* widgets
take a BindingSpec per property and attach it themselves.

Example:
    import databind
    from databind.ui import BindingApp, BoundEntry, BoundLabel

    class Person(databind.Observable):
        def __init__(self):
            self.first_name = "Marty"
            self.last_name = "McFly"

        @property
        def name(self):
            return f"{self.last_name}, {self.first_name}"

    app = BindingApp("People")
    person = Person()

    BoundEntry(app.root, text=databind.bind(person, "first_name")).pack()
    BoundEntry(app.root, text=databind.bind(person, "last_name")).pack()
    BoundLabel(
        app.root,
        text=databind.bind(person, "name", computed_by=["first_name", "last_name"]),
    ).pack()

    app.run()
"""

# Application
from .app import BindingApp

# Targets
from .targets import WidgetTarget

# Widgets
from .widgets import (
    BoundWidgetMixin,
    BoundLabel,
    BoundEntry,
    BoundCheckbutton,
    BoundRadiobutton,
    BoundSpinbox,
)

__all__ = [
    # Application
    'BindingApp',
    # Targets
    'WidgetTarget',
    # Widgets
    'BoundWidgetMixin',
    'BoundLabel',
    'BoundEntry',
    'BoundCheckbutton',
    'BoundRadiobutton',
    'BoundSpinbox',
]
