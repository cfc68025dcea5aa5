"""Two-phase clipboard target negotiation.

When the CLIPBOARD owner changes, the new owner is asked which targets it
offers (TARGETS), the first target that carries actual content is chosen,
and the owner is asked to convert the selection to that target. Both
conversions name the proxy window as requestor and use the ownership
event's timestamp, so a conversion loses cleanly to any newer owner.

The result reflects the owner observed when negotiation started. The
selection may change again before the record is written; that race is
inherent to the selection protocol.

Incremental (INCR) transfers are not supported. The data fetch requests
the maximum property length in a single GetProperty, so payloads larger
than the server's request limit may come back truncated. An owner that
answers with an INCR marker fails the negotiation with ProtocolError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from Xlib import X, Xatom

from xclipwatch.errors import NoUsableTargetError, ProtocolError, translate_xlib_errors
from xclipwatch.selection_utils import wait_for_selection_notify
from xclipwatch.transcode import describe_content

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xclipwatch.atoms import AtomResolver
    from xclipwatch.watch_state import WatchState

logger = logging.getLogger(__name__)

# Targets that describe the negotiation itself rather than content.
META_TARGETS: frozenset[str] = frozenset(
    {"TARGETS", "TIMESTAMP", "SAVE_TARGETS", "MULTIPLE"}
)

# Maximum number of 32-bit atoms read from a TARGETS reply.
MAX_TARGETS: int = 1024

# Length, in 32-bit units, requested when fetching content.
MAX_PROPERTY_LENGTH: int = 0xFFFFFFFF


@dataclass
class ClipboardPayload:
    """Content retrieved from one clipboard owner.

    Attributes:
        content: Raw bytes of the chosen target.
        content_type: Name of the chosen target.
        mime_types: Names of all offered targets, in the owner's order.
    """

    content: bytes
    content_type: str
    mime_types: list[str] = field(default_factory=list)


def negotiate(state: WatchState, timestamp: int) -> ClipboardPayload:
    """Retrieve the clipboard content from its current owner.

    Args:
        state: The watcher state.
        timestamp: Timestamp of the ownership change; used unchanged for
            both conversion requests.

    Returns:
        The retrieved payload.

    Raises:
        ProtocolError: If a round trip fails or the owner refuses a conversion.
        NoUsableTargetError: If no content target is offered.
        TransportFatalError: If the connection is lost.
    """
    targets = request_targets(state, timestamp)
    named_targets = resolve_target_names(state.resolver, targets)
    mime_types = [name for _, name in named_targets]
    logger.debug("Offered targets: %s", mime_types)

    target_atom, content_type = choose_target(named_targets)
    logger.debug("Chose target %s (%s)", content_type, target_atom)

    content = fetch_content(state, target_atom, timestamp)
    logger.debug("Fetched %s as %s", describe_content(content), content_type)
    return ClipboardPayload(
        content=content, content_type=content_type, mime_types=mime_types
    )


def request_targets(state: WatchState, timestamp: int) -> list[int]:
    """Ask the owner for its TARGETS list and read it back.

    Returns:
        The offered target atoms, at most MAX_TARGETS of them, in order.
    """
    targets_atom = state.resolver.resolve("TARGETS")
    _convert_selection(state, targets_atom, timestamp)

    with translate_xlib_errors("reading TARGETS"):
        prop = state.window.get_property(
            state.property_atom, Xatom.ATOM, 0, MAX_TARGETS
        )
    if prop is None or prop.format != 32:
        logger.debug("TARGETS reply carried no atom list")
        return []
    return list(prop.value)[:MAX_TARGETS]


def resolve_target_names(
    resolver: AtomResolver, targets: list[int]
) -> list[tuple[int, str]]:
    """Resolve target atoms to names, preserving order.

    Atoms whose name cannot be looked up are dropped.
    """
    named: list[tuple[int, str]] = []
    for atom in targets:
        try:
            named.append((atom, resolver.name(atom)))
        except ProtocolError as e:
            logger.debug("Dropping unresolvable target %s: %s", atom, e)
    return named


def choose_target(named_targets: list[tuple[int, str]]) -> tuple[int, str]:
    """Return the first offered target that is not a meta target.

    Raises:
        NoUsableTargetError: If every target is a meta target.
    """
    for atom, name in named_targets:
        if name not in META_TARGETS:
            return atom, name
    offered = ", ".join(name for _, name in named_targets) or "none"
    raise NoUsableTargetError(f"No usable target offered (offered: {offered})")


def fetch_content(state: WatchState, target_atom: int, timestamp: int) -> bytes:
    """Convert the selection to target_atom and read the result.

    The staging property is deleted by the server as it is read.

    Raises:
        ProtocolError: If the owner starts an incremental transfer.
    """
    incr_atom = state.resolver.resolve("INCR")
    _convert_selection(state, target_atom, timestamp)

    with translate_xlib_errors("reading selection data"):
        prop = state.window.get_property(
            state.property_atom, X.AnyPropertyType, 0, MAX_PROPERTY_LENGTH,
            delete=True,
        )
    if prop is None:
        logger.debug("Selection property was empty")
        return b""
    if prop.property_type == incr_atom:
        raise ProtocolError("incremental transfer not supported")

    data = prop.value
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _convert_selection(state: WatchState, target_atom: int, timestamp: int) -> None:
    """Request conversion to target_atom and wait for its SelectionNotify.

    Raises:
        ProtocolError: If the request errors or the owner refuses.
    """
    with translate_xlib_errors("ConvertSelection"):
        state.window.convert_selection(
            state.selection_atom, target_atom, state.property_atom, timestamp
        )
        state.display.flush()

    event = wait_for_selection_notify(
        state.display, state.window, state.selection_atom, target_atom,
        state.deferred_events,
    )
    if event.property == X.NONE:
        raise ProtocolError(f"Owner refused conversion to target {target_atom}")
