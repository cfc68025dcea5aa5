#!/usr/bin/env python3
"""Clipboard watcher state.

This module provides the WatchState dataclass that groups the X11 handles
and the atom resolver owned by the watch loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from xclipwatch.atoms import AtomResolver
from xclipwatch.clipboard import create_hidden_window

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.protocol.rq import Event
    from Xlib.xobject.drawable import Window

# The only selection watched.
SELECTION_NAME: str = "CLIPBOARD"

# Property on the proxy window that receives conversion results.
PROPERTY_NAME: str = "XCLIPWATCH_DATA"


@dataclass
class WatchState:
    """State for clipboard watching.

    Every field is used by exactly one negotiation at a time; the loop is
    sequential, so nothing here needs locking.

    Attributes:
        display: The X11 display connection.
        window: The hidden proxy window named as requestor.
        resolver: Atom cache for this server session.
        selection_atom: Cached CLIPBOARD atom.
        property_atom: Cached staging property atom.
        deferred_events: Ownership changes seen while a negotiation
            was waiting, handled before reading new events.
    """

    display: Display
    window: Window
    resolver: AtomResolver
    selection_atom: int
    property_atom: int
    deferred_events: list[Event] = field(default_factory=list)


def create_watch_state(display: Display) -> WatchState:
    """Create the proxy window and intern the fixed atoms.

    Args:
        display: The X11 display connection.

    Returns:
        A ready WatchState.

    Raises:
        ProtocolError: If interning an atom fails.
        TransportFatalError: If the connection is lost.
    """
    resolver = AtomResolver(display)
    window = create_hidden_window(display)
    return WatchState(
        display=display,
        window=window,
        resolver=resolver,
        selection_atom=resolver.resolve(SELECTION_NAME),
        property_atom=resolver.resolve(PROPERTY_NAME),
    )
