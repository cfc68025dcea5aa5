"""Atom name resolution.

Maps protocol type names to the server's interned atom identifiers and
back. Atoms are immutable for the lifetime of a server session, so both
directions are cached for the lifetime of the process and never
invalidated.
"""

from __future__ import annotations

import logging

from Xlib import X

from xclipwatch.errors import ProtocolError, translate_xlib_errors

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display

logger = logging.getLogger(__name__)


class AtomResolver:
    """Resolve atom names to identifiers and identifiers to names.

    Owned by the watch loop rather than shared globally so it can be
    exercised with a mock display.
    """

    def __init__(self, display: Display) -> None:
        self.display = display
        self._atoms: dict[str, int] = {}
        self._names: dict[int, str] = {}

    def resolve(self, name: str) -> int:
        """Return the atom for name, interning it if needed.

        Raises:
            ProtocolError: If the InternAtom round trip fails.
            TransportFatalError: If the connection is lost.
        """
        atom = self._atoms.get(name)
        if atom is not None:
            return atom
        with translate_xlib_errors(f"InternAtom {name!r}"):
            atom = self.display.intern_atom(name)
        if atom == X.NONE:
            raise ProtocolError(f"InternAtom {name!r} returned None")
        self._remember(name, atom)
        return atom

    def name(self, atom: int) -> str:
        """Return the name of atom.

        Raises:
            ProtocolError: If GetAtomName fails or returns an empty name.
            TransportFatalError: If the connection is lost.
        """
        name = self._names.get(atom)
        if name is not None:
            return name
        with translate_xlib_errors(f"GetAtomName {atom}"):
            name = self.display.get_atom_name(atom)
        if isinstance(name, bytes):
            name = name.decode("utf-8", errors="replace")
        if not name:
            raise ProtocolError(f"GetAtomName {atom} returned no name")
        self._remember(name, atom)
        return name

    def _remember(self, name: str, atom: int) -> None:
        logger.debug("Atom %s = %r", atom, name)
        self._atoms.setdefault(name, atom)
        self._names.setdefault(atom, name)
