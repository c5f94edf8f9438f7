"""pacman adapter — Arch Linux and derivatives."""

from __future__ import annotations

from devkit.adapters.base import PackageManager


class PacmanAdapter(PackageManager):
    """``pacman -Sy`` / ``pacman -S --needed``, never prompting."""

    @property
    def name(self) -> str:
        return "pacman"

    def index_command(self) -> list[str]:
        return ["pacman", "-Sy", "--noconfirm"]

    def install_command(self, names: list[str]) -> list[str]:
        return ["pacman", "-S", "--noconfirm", "--needed", *names]
