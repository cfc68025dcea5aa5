#!/usr/bin/env python3
"""
Exception taxonomy for clipboard watching.

Only connection establishment and capability registration are fatal.
Everything that can go wrong while negotiating a single ownership change
is isolated to that cycle:

- SetupError: XFixes unavailable or registration failed (fatal)
- ProtocolError: a round trip errored (per-cycle)
- NoUsableTargetError: the owner offered no content target (per-cycle)
- TransportFatalError: the display connection is gone (fatal)
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from Xlib.error import ConnectionClosedError, XError


class SetupError(Exception):
    """
    Exception raised when selection tracking cannot be set up.

    Raised at startup when the XFixes extension is missing, version
    negotiation fails, or the ownership-change registration errors.
    """

    pass


class ProtocolError(Exception):
    """
    Exception raised when a request/reply round trip fails.

    Covers atom interning and lookup, target discovery and data fetch.
    The current negotiation is abandoned; the watch loop continues.
    """

    pass


class NoUsableTargetError(Exception):
    """
    Exception raised when the owner offers only meta targets.

    Target discovery succeeded but every offered target was negotiation
    machinery (TARGETS, TIMESTAMP, ...) or nothing was offered at all.
    """

    pass


class TransportFatalError(Exception):
    """Exception raised when the display connection is lost or closed."""

    pass


@contextmanager
def translate_xlib_errors(operation: str) -> Iterator[None]:
    """
    Map python-xlib exceptions onto the watcher's error taxonomy.

    Args:
        operation: Short description of the request, used in messages.

    Raises:
        TransportFatalError: If the connection closed during the operation.
        ProtocolError: If the server answered with an X protocol error.
    """
    try:
        yield
    except ConnectionClosedError as e:
        raise TransportFatalError(f"Display connection lost during {operation}: {e}") from e
    except XError as e:
        raise ProtocolError(f"{operation} failed: {e}") from e
