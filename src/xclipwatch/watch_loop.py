#!/usr/bin/env python3
"""Main clipboard watch loop.

This module provides run_watch_loop, a single-threaded, blocking loop that
waits for CLIPBOARD ownership changes and negotiates with each new owner
in turn. A negotiation always completes (or fails) before the next event
is handled, so at most one negotiation is ever in flight. Ownership
changes that arrive during a negotiation are deferred, not dropped, and
handled afterwards in arrival order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from Xlib import X

from xclipwatch.clipboard_events import next_ownership_event
from xclipwatch.emit import emit_payload
from xclipwatch.errors import NoUsableTargetError, ProtocolError
from xclipwatch.negotiate import negotiate

if TYPE_CHECKING:
    from xclipwatch.clipboard_events import OwnershipEvent
    from xclipwatch.watch_state import WatchState

logger = logging.getLogger(__name__)


def run_watch_loop(state: WatchState) -> None:
    """Run the watch loop until the display connection fails.

    Per-event failures are logged and dropped; there are no retries.

    Args:
        state: The watcher state, already registered for ownership changes.

    Raises:
        TransportFatalError: When the display connection is lost.
    """
    while True:
        event = next_ownership_event(
            state.display, state.selection_atom, state.deferred_events
        )
        handle_ownership_change(state, event)


def handle_ownership_change(state: WatchState, event: OwnershipEvent) -> bool:
    """Negotiate with the new owner and emit the result.

    Args:
        state: The watcher state.
        event: The ownership change to handle.

    Returns:
        True if a record was emitted, False otherwise.
    """
    if event.owner == X.NONE:
        logger.debug("Clipboard cleared at %s, nothing to fetch", event.timestamp)
        return False

    logger.debug("Clipboard owner changed to %s at %s", event.owner, event.timestamp)
    try:
        payload = negotiate(state, event.timestamp)
    except (ProtocolError, NoUsableTargetError) as e:
        logger.error("failed to get clipboard: %s", e)
        return False

    emit_payload(payload)
    return True
