#!/usr/bin/env python3
"""X11 selection utility functions.

This module provides helper functions for working with X11 selections,
including the blocking wait for a conversion's completion notification.
"""

from __future__ import annotations

import logging

from xclipwatch.errors import translate_xlib_errors

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.protocol.rq import Event
    from Xlib.xobject.drawable import Window

logger = logging.getLogger(__name__)


def resource_id(value: object) -> int:
    """Return the numeric id of a window field from an event.

    python-xlib hands window fields back as Window objects; atoms and
    X.NONE arrive as plain integers.
    """
    return getattr(value, "id", value)


def wait_for_selection_notify(
    display: "Display",
    window: "Window",
    selection_atom: int,
    target_atom: int,
    deferred_events: list["Event"],
) -> "Event":
    """Block until the SelectionNotify for a conversion request arrives.

    Reads events from the display until a SelectionNotify addressed to
    window for the given selection and target is found. Ownership changes
    (SetSelectionOwnerNotify) that arrive mid-negotiation are appended to
    deferred_events so the watch loop handles them next; every other
    event is discarded.

    There is no timeout: an owner that never answers blocks the watcher.

    Args:
        display: The X11 display connection.
        window: The proxy window named as requestor.
        selection_atom: The selection being converted.
        target_atom: The target that was requested.
        deferred_events: List to collect ownership changes during the wait.

    Returns:
        The matching SelectionNotify event.

    Raises:
        TransportFatalError: If the connection is lost while waiting.
    """
    from Xlib import X

    while True:
        with translate_xlib_errors("waiting for SelectionNotify"):
            event = display.next_event()
        if (
            event.type == X.SelectionNotify
            and resource_id(event.requestor) == window.id
            and event.selection == selection_atom
            and event.target == target_atom
        ):
            return event
        if type(event).__name__ == "SetSelectionOwnerNotify":
            deferred_events.append(event)
            continue
        logger.debug(
            "Discarding event type=%s class=%s while waiting for SelectionNotify",
            event.type, type(event).__name__,
        )
