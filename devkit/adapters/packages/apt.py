"""apt adapter — Debian, Ubuntu and derivatives."""

from __future__ import annotations

from devkit.adapters.base import PackageManager


class AptAdapter(PackageManager):
    """``apt update -qq`` / ``apt install -y -qq``."""

    @property
    def name(self) -> str:
        return "apt"

    def index_command(self) -> list[str]:
        return ["apt", "update", "-qq"]

    def install_command(self, names: list[str]) -> list[str]:
        return ["apt", "install", "-y", "-qq", *names]
