#!/usr/bin/env python3
"""Pytest fixtures for xclipwatch tests.

Provides a mocked X11 display and proxy window with a small atom table,
plus helpers for building the events and property replies the watcher
reads.
"""

import os
from typing import Any
from unittest.mock import MagicMock

import pytest
from Xlib import X
from Xlib.error import XError

from xclipwatch.atoms import AtomResolver
from xclipwatch.watch_state import WatchState

WINDOW_ID = 42

ATOMS = {
    "CLIPBOARD": 100,
    "XCLIPWATCH_DATA": 101,
    "TARGETS": 102,
    "TIMESTAMP": 103,
    "SAVE_TARGETS": 104,
    "MULTIPLE": 105,
    "UTF8_STRING": 106,
    "text/plain": 107,
    "image/png": 108,
    "INCR": 109,
}


def has_display() -> bool:
    """Check if X11 display is available."""
    return os.environ.get("DISPLAY") is not None


class FakeXError(XError):
    """XError that can be raised without a server reply to parse."""

    def __init__(self, message: str = "BadAtom") -> None:
        Exception.__init__(self, message)
        self._data = {}
        self.message = message

    def __str__(self) -> str:
        return self.message


class SetSelectionOwnerNotify:
    """Stand-in for the XFixes event class, matched by name."""

    def __init__(self, selection: int, timestamp: int, owner: int = 7) -> None:
        self.type = 87
        self.selection = selection
        self.timestamp = timestamp
        self.owner = owner


def make_event(event_type: int, **fields: Any) -> MagicMock:
    """Create a mock X11 event of event_type with the given fields."""
    event = MagicMock()
    event.type = event_type
    for name, value in fields.items():
        setattr(event, name, value)
    return event


def selection_notify(target: int, prop: int = ATOMS["XCLIPWATCH_DATA"]) -> MagicMock:
    """Create the SelectionNotify answering a conversion to target."""
    return make_event(
        X.SelectionNotify,
        requestor=WINDOW_ID,
        selection=ATOMS["CLIPBOARD"],
        target=target,
        property=prop,
    )


def owner_notify(timestamp: int = 5000, owner: int = 7) -> SetSelectionOwnerNotify:
    """Create an XFixes ownership change for CLIPBOARD."""
    return SetSelectionOwnerNotify(ATOMS["CLIPBOARD"], timestamp, owner)


def make_property(value: Any, fmt: int = 32, prop_type: int = 0) -> MagicMock:
    """Create a GetProperty reply."""
    prop = MagicMock()
    prop.value = value
    prop.format = fmt
    prop.property_type = prop_type
    return prop


def atoms(*names: str) -> list[int]:
    """Return the atom ids for names."""
    return [ATOMS[name] for name in names]


@pytest.fixture
def mock_display() -> MagicMock:
    """Mock Display whose atom requests are answered from ATOMS."""
    names = {atom: name for name, atom in ATOMS.items()}

    def get_atom_name(atom: int) -> str:
        if atom not in names:
            raise FakeXError(f"BadAtom {atom}")
        return names[atom]

    display = MagicMock()
    display.intern_atom.side_effect = lambda name: ATOMS[name]
    display.get_atom_name.side_effect = get_atom_name
    return display


@pytest.fixture
def mock_window() -> MagicMock:
    """Mock proxy window."""
    window = MagicMock()
    window.id = WINDOW_ID
    return window


@pytest.fixture
def watch_state(mock_display: MagicMock, mock_window: MagicMock) -> WatchState:
    """WatchState wired to the mock display and window."""
    return WatchState(
        display=mock_display,
        window=mock_window,
        resolver=AtomResolver(mock_display),
        selection_atom=ATOMS["CLIPBOARD"],
        property_atom=ATOMS["XCLIPWATCH_DATA"],
    )
