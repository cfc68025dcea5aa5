"""X11 clipboard ownership-change events.

This module registers for XFixes selection notifications and turns the
display's event stream into a sequence of ownership changes. XFixes
provides true event-driven notification when clipboard ownership changes,
so the watcher is idle whenever nothing is copied.

The module handles:
- Negotiating the XFixes extension version
- Registering the proxy window for SetSelectionOwnerNotify on CLIPBOARD
- Blocking until the next ownership change
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from Xlib.error import ConnectionClosedError, XError

from xclipwatch.errors import SetupError, translate_xlib_errors
from xclipwatch.selection_utils import resource_id

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.protocol.rq import Event
    from Xlib.xobject.drawable import Window

logger = logging.getLogger(__name__)

# Selection tracking was introduced in XFixes 1.0.
MIN_XFIXES_MAJOR: int = 1


@dataclass(frozen=True)
class OwnershipEvent:
    """A change of selection owner reported by XFixes.

    Attributes:
        selection: The selection atom whose owner changed.
        timestamp: Server timestamp of the change, reused for both
            conversion requests of the resulting negotiation.
        owner: Window id of the new owner, or X.NONE when cleared.
    """

    selection: int
    timestamp: int
    owner: int


def register_for_ownership_changes(
    display: Display, window: Window, selection_atom: int
) -> None:
    """Register for XFixes selection owner notifications.

    Negotiates the XFixes version and asks the server to deliver
    SetSelectionOwnerNotify events for selection_atom to window.

    Args:
        display: The X11 display connection.
        window: The proxy window that receives the events.
        selection_atom: The selection to watch (CLIPBOARD).

    Raises:
        SetupError: If XFixes is unavailable or registration fails.
    """
    from Xlib.ext import xfixes

    if not display.has_extension("XFIXES"):
        raise SetupError("X server does not support the XFIXES extension")

    try:
        reply = xfixes.query_version(display)
        if reply.major_version < MIN_XFIXES_MAJOR:
            raise SetupError(
                f"XFIXES {reply.major_version}.{reply.minor_version} is too old, "
                f"need at least {MIN_XFIXES_MAJOR}.0"
            )
        logger.debug(
            "XFIXES version %s.%s", reply.major_version, reply.minor_version
        )

        mask = xfixes.XFixesSetSelectionOwnerNotifyMask
        xfixes.select_selection_input(display, window.id, selection_atom, mask)
        display.flush()
    except (XError, ConnectionClosedError) as e:
        raise SetupError(f"Failed to register for selection events: {e}") from e


def next_ownership_event(
    display: Display,
    selection_atom: int,
    deferred_events: list[Event] | None = None,
) -> OwnershipEvent:
    """Block until the owner of selection_atom changes.

    Ownership changes deferred during a negotiation are drained first, in
    the order they arrived, before the display is read again. Events that
    are not SetSelectionOwnerNotify for the watched selection are
    discarded. The wait is unbounded.

    Args:
        display: The X11 display connection.
        selection_atom: The watched selection atom.
        deferred_events: Events deferred while waiting for SelectionNotify.

    Returns:
        The ownership change.

    Raises:
        TransportFatalError: If the connection is lost while waiting.
    """
    while True:
        if deferred_events:
            event = deferred_events.pop(0)
        else:
            with translate_xlib_errors("waiting for ownership change"):
                event = display.next_event()
        if (
            type(event).__name__ == "SetSelectionOwnerNotify"
            and event.selection == selection_atom
        ):
            return OwnershipEvent(
                selection=event.selection,
                timestamp=event.timestamp,
                owner=resource_id(event.owner),
            )
        logger.debug(
            "Ignoring X11 event type=%s class=%s", event.type, type(event).__name__
        )
