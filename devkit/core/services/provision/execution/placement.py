"""
L2 Execution — File placement engine.

Symlinks tracked dotfiles into the home directory.  The data-safety
guarantee: a destination that exists and is NOT a symlink is moved
into the run's backup directory before anything is linked.  Symlinks
at the destination belong to devkit and are replaced without backup.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devkit.core.models.placement import PlacementEntry, PlacementResult
from devkit.core.models.platform import Platform
from devkit.core.services.provision.execution.backup import BackupDirectory
from devkit.core.services.provision.progress import ProgressFn, log_progress

logger = logging.getLogger(__name__)


def expand_dest(dest: str, home: Path) -> Path:
    """Expand a leading ``~`` against ``home`` (not the process HOME)."""
    if dest == "~":
        return home
    if dest.startswith("~/"):
        return home / dest[2:]
    return Path(dest)


class PlacementEngine:
    """Link sources to destinations with backup-before-overwrite."""

    def __init__(
        self,
        backup: BackupDirectory,
        *,
        on_progress: ProgressFn | None = None,
    ):
        self.backup = backup
        self._progress = on_progress or log_progress

    def link(self, source: Path, dest: Path) -> PlacementResult:
        """Make ``dest`` a symlink to ``source``.

        A missing source is skipped with a warning.  Idempotent: once
        ``dest`` links to ``source`` a repeat call just recreates the
        link and backs up nothing.
        """
        source, dest = Path(source), Path(dest)

        if not source.exists():
            self._progress("warn", f"Source not found, skipping: {source}")
            return PlacementResult(source=str(source), dest=str(dest), status="missing_source")

        backup_path: Path | None = None
        try:
            if dest.is_symlink():
                # Ours from a previous run (possibly dangling)
                dest.unlink()
            elif dest.exists():
                backup_path = self.backup.stash(dest)
                self._progress("info", f"Backing up existing {dest.name} to {backup_path}")

            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.symlink_to(source)
        except OSError as e:
            logger.warning("Could not link %s: %s", dest, e)
            self._progress("error", f"Could not link {dest}: {e}")
            return PlacementResult(
                source=str(source),
                dest=str(dest),
                status="failed",
                backup=str(backup_path) if backup_path else None,
                error=str(e),
            )
        self._progress("success", f"Linked: {dest.name} -> {source}")

        return PlacementResult(
            source=str(source),
            dest=str(dest),
            status="linked",
            backup=str(backup_path) if backup_path else None,
        )

    def link_all(
        self,
        entries: list[PlacementEntry],
        *,
        dotfiles_dir: Path,
        home: Path,
        platform: Platform,
    ) -> list[PlacementResult]:
        """Link every entry that applies to ``platform``."""
        results: list[PlacementResult] = []
        for entry in entries:
            if not platform.matches(entry.platforms):
                logger.debug("Placement %s does not apply to %s", entry.dest, platform.os_family)
                continue
            results.append(
                self.link(dotfiles_dir / entry.source, expand_dest(entry.dest, home))
            )
        return results
