"""Homebrew adapter — macOS."""

from __future__ import annotations

from devkit.adapters.base import PackageManager


class BrewAdapter(PackageManager):
    """``brew update`` / ``brew install``.  Homebrew refuses to run as root."""

    needs_sudo = False

    @property
    def name(self) -> str:
        return "brew"

    def index_command(self) -> list[str]:
        return ["brew", "update"]

    def install_command(self, names: list[str]) -> list[str]:
        return ["brew", "install", *names]

    def install_casks(self, names: list[str]) -> None:
        """Install GUI applications (``brew install --cask``)."""
        if not names:
            return
        result = self._runner.run(["brew", "install", "--cask", *names])
        self._raise_for(result, names)
