"""X11 display connection and proxy window setup.

This module provides the bootstrap pieces the watcher needs before it can
observe the CLIPBOARD selection using the python-xlib library:

- Validating X11 display connectivity
- Creating the hidden proxy window that receives ownership and
  conversion notifications
"""

from __future__ import annotations

import sys

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.xobject.drawable import Window


def validate_display(display_name: str | None) -> Display:
    """Validate X11 connectivity and return Display object.

    Opens the X11 connection named by display_name. This is called at
    startup to fail fast if X11 is not available; nothing else can run
    without the connection.

    Args:
        display_name: X11 display name (e.g. ":0"), usually taken from
            the DISPLAY environment variable.

    Returns:
        Display object for X11 operations.

    Raises:
        SystemExit: If no display name is given or the connection fails.
    """
    if not display_name:
        print("Error: DISPLAY environment variable is not set.", file=sys.stderr)
        print("X11 display is required for clipboard access.", file=sys.stderr)
        sys.exit(1)

    try:
        from Xlib.display import Display as XDisplay
        return XDisplay(display_name)
    except Exception as e:
        print(f"Error: Failed to connect to X11 display: {e}", file=sys.stderr)
        sys.exit(1)


def create_hidden_window(display: Display) -> Window:
    """Create a 1x1 unmapped window used as the protocol endpoint.

    Selection conversion replies and XFixes notifications must be addressed
    to a window. This window is never mapped, resized or destroyed; it is
    reclaimed by the server when the connection closes.

    Args:
        display: The X11 display connection.

    Returns:
        The proxy Window.
    """
    screen = display.screen()
    window = screen.root.create_window(0, 0, 1, 1, 0, screen.root_depth)
    return window
