"""
L2 Execution — Run-scoped backup directory.

Every pre-existing, unmanaged file that a placement would overwrite is
MOVED here first.  The directory is created lazily on the first backup
and named after the run start time, so a run that overwrites nothing
leaves no trace.
"""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class BackupDirectory:
    """``<home>/<prefix>-YYYYmmdd-HHMMSS``, created on first use."""

    def __init__(
        self,
        home: Path,
        *,
        prefix: str = ".dotfiles-backup",
        started_at: datetime | None = None,
    ):
        ts = (started_at or datetime.now()).strftime("%Y%m%d-%H%M%S")
        self._base = Path(home) / f"{prefix}-{ts}"
        self._path: Path | None = None
        self._stashed: dict[Path, Path] = {}

    @property
    def path(self) -> Path:
        """Where backups go (may not exist yet)."""
        return self._path or self._base

    @property
    def created(self) -> bool:
        return self._path is not None

    @property
    def stashed(self) -> dict[Path, Path]:
        """Original path → backup path, for everything moved this run."""
        return dict(self._stashed)

    def _ensure(self) -> Path:
        if self._path is None:
            # Another run in the same second already owns the base name
            candidate = self._base
            n = 1
            while candidate.exists():
                candidate = self._base.with_name(f"{self._base.name}-{n}")
                n += 1
            candidate.mkdir(parents=True)
            self._path = candidate
            logger.info("Created backup directory %s", candidate)
        return self._path

    def stash(self, target: Path) -> Path:
        """Move ``target`` into the backup directory.

        Keeps the basename; a second file with the same basename in the
        same run gets a ``-1``, ``-2``, ... suffix.

        Returns:
            The backup path.
        """
        target = Path(target)
        if target in self._stashed:
            return self._stashed[target]

        root = self._ensure()
        dest = root / target.name
        n = 1
        while dest.exists() or dest.is_symlink():
            dest = root / f"{target.name}-{n}"
            n += 1

        shutil.move(str(target), str(dest))
        self._stashed[target] = dest
        logger.info("Backed up %s → %s", target, dest)
        return dest
