"""
L2 Execution — Font installation.

Copies the repository's ``fonts/*.ttf`` into the per-user font
directory.  Linux additionally refreshes the fontconfig cache.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from devkit.adapters.shell.command import CommandRunner
from devkit.core.models.platform import Platform
from devkit.core.services.provision.data.constants import LINUX_FONT_DIR, MACOS_FONT_DIR
from devkit.core.services.provision.execution.placement import expand_dest
from devkit.core.services.provision.progress import ProgressFn, log_progress

logger = logging.getLogger(__name__)


def font_target_dir(platform: Platform, home: Path) -> Path:
    return expand_dest(MACOS_FONT_DIR if platform.is_macos else LINUX_FONT_DIR, home)


def install_fonts(
    fonts_dir: Path,
    *,
    platform: Platform,
    home: Path,
    runner: CommandRunner,
    on_progress: ProgressFn | None = None,
) -> list[Path]:
    """Copy every ``*.ttf`` in ``fonts_dir``.

    Returns:
        The installed font paths (empty when there was nothing to copy).
    """
    progress = on_progress or log_progress
    fonts = sorted(Path(fonts_dir).glob("*.ttf"))
    if not fonts:
        progress("warn", f"No fonts found in {fonts_dir}")
        return []

    target = font_target_dir(platform, home)
    target.mkdir(parents=True, exist_ok=True)

    installed = []
    for font in fonts:
        dest = target / font.name
        shutil.copy2(font, dest)
        installed.append(dest)
    logger.info("Copied %d font(s) to %s", len(installed), target)

    if platform.is_linux:
        if runner.which("fc-cache"):
            result = runner.run(["fc-cache", "-f", str(target)], capture=True)
            if not result.ok:
                progress("warn", "fc-cache failed; fonts will appear after the next cache refresh")
        else:
            logger.debug("fc-cache not found, skipping cache refresh")

    progress("success", f"Installed {len(installed)} font(s) to {target}")
    return installed
