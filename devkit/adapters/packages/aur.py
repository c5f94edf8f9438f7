"""
AUR adapter — community packages on the Arch family.

Only ever used as a fallback after a native pacman install failed.
Installs go through an AUR helper (``yay``, else ``paru``).  When no
helper is installed, ``yay-bin`` is built from the AUR with makepkg and
the request is retried exactly once.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from devkit.adapters.base import PackageManager
from devkit.adapters.packages.pacman import PacmanAdapter
from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import InstallFailure

logger = logging.getLogger(__name__)

AUR_HELPERS = ("yay", "paru")
YAY_BIN_REPO = "https://aur.archlinux.org/yay-bin.git"


class AurAdapter(PackageManager):
    """Install packages from the AUR through a helper."""

    # Helpers call sudo themselves and refuse to run as root.
    needs_sudo = False

    def __init__(self, runner: CommandRunner, pacman: PacmanAdapter):
        super().__init__(runner)
        self._pacman = pacman

    @property
    def name(self) -> str:
        return "aur"

    @property
    def executable(self) -> str:
        return self.helper() or AUR_HELPERS[0]

    def helper(self) -> str | None:
        """The first AUR helper found on PATH."""
        for candidate in AUR_HELPERS:
            if self._runner.which(candidate):
                return candidate
        return None

    def index_command(self) -> list[str]:
        return [self.executable, "-Sy", "--noconfirm"]

    def install_command(self, names: list[str]) -> list[str]:
        return [self.executable, "-S", "--noconfirm", "--needed", *names]

    def install_packages(self, names: list[str]) -> None:
        """Install through the helper, bootstrapping yay first if needed."""
        if not names:
            return
        helper = self.helper()
        if helper is None:
            logger.warning("No AUR helper found, bootstrapping yay")
            self.bootstrap_helper()
            helper = "yay"
        result = self._runner.run([helper, "-S", "--noconfirm", "--needed", *names])
        self._raise_for(result, names)

    def bootstrap_helper(self) -> None:
        """Build and install ``yay-bin`` from the AUR.

        Raises:
            InstallFailure: Any bootstrap command failed.
        """
        self._pacman.install_packages(["git", "base-devel"])

        with tempfile.TemporaryDirectory(prefix="devkit-yay-") as tmp:
            checkout = Path(tmp) / "yay-bin"
            clone = self._runner.run(["git", "clone", YAY_BIN_REPO, str(checkout)])
            if not clone.ok:
                raise InstallFailure(
                    self.name, ["yay-bin"],
                    returncode=clone.returncode, detail="git clone failed",
                )
            build = self._runner.run(["makepkg", "-si", "--noconfirm"], cwd=checkout)
            if not build.ok:
                raise InstallFailure(
                    self.name, ["yay-bin"],
                    returncode=build.returncode, detail="makepkg failed",
                )
        logger.info("yay installed from %s", YAY_BIN_REPO)
