"""CLI handling for xclipwatch.

This module provides the command-line interface for xclipwatch, handling
argument parsing via click, logging configuration, and startup of the
watch loop.

Usage:
    xclipwatch [--display NAME] [--verbose]
"""

import click
import sys

from xclipwatch.main_logging import configure_logging


@click.command()
@click.option(
    "--display",
    "display_name",
    envvar="DISPLAY",
    help="X11 display to watch (defaults to $DISPLAY)",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
def main(display_name: str | None, verbose: bool) -> None:
    """Print a JSON line for every change of the X11 CLIPBOARD."""
    configure_logging(verbose)

    _run_watcher(display_name)


def _run_watcher(display_name: str | None) -> None:
    """Connect, register for ownership changes and watch forever.

    Args:
        display_name: X11 display name, or None if unset.
    """
    from xclipwatch.clipboard import validate_display
    from xclipwatch.clipboard_events import register_for_ownership_changes
    from xclipwatch.errors import ProtocolError, SetupError, TransportFatalError
    from xclipwatch.watch_loop import run_watch_loop
    from xclipwatch.watch_state import create_watch_state

    display = validate_display(display_name)
    try:
        state = create_watch_state(display)
        register_for_ownership_changes(display, state.window, state.selection_atom)
        run_watch_loop(state)
    except (SetupError, ProtocolError, TransportFatalError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
