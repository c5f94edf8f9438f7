"""
L1 Detection — Capability prober.

"Is this command reachable?" — answered by searching the run's
execution path.  Read-only; safe to call any number of times.
"""

from __future__ import annotations

import os
import shutil


class CapabilityProber:
    """Searches an owned copy of PATH for executables.

    Installers that put binaries outside the inherited PATH register
    their directories with ``prepend()`` so later probes in the same
    run see them.
    """

    def __init__(self, search_path: str | None = None):
        if search_path is None:
            search_path = os.environ.get("PATH", os.defpath)
        self._path = search_path

    @property
    def path(self) -> str:
        return self._path

    def resolve(self, name: str) -> str | None:
        """Absolute path of the executable, or None."""
        return shutil.which(name, path=self._path)

    def is_present(self, name: str) -> bool:
        return self.resolve(name) is not None

    def prepend(self, dirs: list[str] | tuple[str, ...]) -> None:
        """Put directories at the front of the search path."""
        current = [p for p in self._path.split(os.pathsep) if p]
        for d in reversed(dirs):
            d = os.path.expanduser(d)
            if d in current:
                current.remove(d)
            current.insert(0, d)
        self._path = os.pathsep.join(current)
