#!/usr/bin/env python3
"""
Address Book Example - databind Demo

A small form bound to a person with two addresses. Editing a field writes
straight into the model; the buttons change the shape of the model (swap
the addresses, drop one, add a new one) and every bound field follows.

Run with: python examples/address_book.py
"""

import datetime
import logging
import tkinter as tk
from tkinter import ttk
import sys
import os

# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import databind
from databind import bind
from databind.ui import BindingApp, BoundCheckbutton, BoundEntry, BoundLabel, BoundSpinbox


class Address(databind.Observable):
    """A postal address."""

    def __init__(self, street="", city=""):
        self.street = street
        self.city = city


class Person(databind.Observable):
    """A person with a list of addresses and a computed age."""

    def __init__(self):
        self.first_name = "Bruce"
        self.last_name = "Ting"
        self.year_of_birth = 1985
        self.newsletter = False
        self.addresses = [Address("20 Naper Ave", "Springfield"), Address("101 Confession St", "Shelbyville")]

    @property
    def name(self):
        return f"{self.last_name}, {self.first_name}"

    @property
    def age(self):
        return datetime.date.today().year - self.year_of_birth


def labelled(parent, row, text, widget):
    tk.Label(parent, text=text, width=14, anchor='e').grid(row=row, column=0, padx=5, pady=2)
    widget.grid(row=row, column=1, sticky='we', padx=5, pady=2)
    return widget


def main():
    logging.basicConfig(level=logging.INFO)

    # Create the application
    app = BindingApp("databind Address Book", width=420, height=420)
    app.root.columnconfigure(1, weight=1)

    # Create the model
    person = Person()

    # Style
    style = ttk.Style()
    style.configure('Header.TLabel', font=('Helvetica', 12, 'bold'))

    ttk.Label(app.root, text="Address Book", style='Header.TLabel').grid(
        row=0, column=0, columnspan=2, pady=10
    )

    # Person
    labelled(app.root, 1, "First name:", BoundEntry(app.root, text=bind(person, "first_name")))
    labelled(app.root, 2, "Last name:", BoundEntry(app.root, text=bind(person, "last_name")))
    labelled(app.root, 3, "Year of birth:", BoundSpinbox(
        app.root, selection=bind(person, "year_of_birth", "int"), from_=1900, to=2100
    ))
    labelled(app.root, 4, "Display name:", BoundLabel(
        app.root, text=bind(person, "name", computed_by=["first_name", "last_name"]),
        anchor='w', relief='sunken', bg='white'
    ))
    labelled(app.root, 5, "Age:", BoundLabel(
        app.root, text=bind(person, "age", "int", computed_by="year_of_birth"),
        anchor='w', relief='sunken', bg='white'
    ))
    labelled(app.root, 6, "Newsletter:", BoundCheckbutton(app.root, selection=bind(person, "newsletter")))

    # Addresses, bound by index
    ttk.Label(app.root, text="Addresses", font=('Helvetica', 10, 'bold')).grid(
        row=7, column=0, columnspan=2, sticky='w', padx=10, pady=(15, 5)
    )
    labelled(app.root, 8, "Street 1:", BoundEntry(app.root, text=bind(person, "addresses[0].street")))
    labelled(app.root, 9, "City 1:", BoundEntry(app.root, text=bind(person, "addresses[0].city")))
    labelled(app.root, 10, "Street 2:", BoundEntry(app.root, text=bind(person, "addresses[1].street")))
    labelled(app.root, 11, "City 2:", BoundEntry(app.root, text=bind(person, "addresses[1].city")))

    # Shape changes
    buttons = tk.Frame(app.root)
    buttons.grid(row=12, column=0, columnspan=2, pady=15)
    tk.Button(buttons, text="Swap", command=person.addresses.reverse).pack(side='left', padx=3)
    tk.Button(buttons, text="Remove first", command=lambda: person.addresses and person.addresses.pop(0)).pack(
        side='left', padx=3
    )
    tk.Button(buttons, text="Add", command=lambda: person.addresses.append(Address("New street", "New city"))).pack(
        side='left', padx=3
    )
    tk.Button(buttons, text="Print model", command=lambda: print(
        person.name, [(a.street, a.city) for a in person.addresses]
    )).pack(side='left', padx=3)

    # Run the application
    print("Starting databind Address Book...")
    print("Edit any field; the model follows. Use the buttons to reshape the model.")
    app.run()


if __name__ == '__main__':
    main()
