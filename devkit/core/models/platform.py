"""
Platform model — what kind of host are we provisioning.

Detected exactly once at process start and passed explicitly to every
component that needs it.  Immutable.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

OsFamily = Literal["linux", "macos"]
DistroFamily = Literal["debian", "arch", "macos", "unknown"]
PackageManagerId = Literal["apt", "pacman", "brew"]


class Platform(BaseModel):
    """OS family, distribution family and package manager of the host."""

    model_config = ConfigDict(frozen=True)

    os_family: OsFamily
    distro_family: DistroFamily
    package_manager: PackageManagerId
    distro_id: str = ""             # raw os-release ID (e.g. "ubuntu")
    machine: str = "x86_64"         # uname -m

    @property
    def is_macos(self) -> bool:
        return self.os_family == "macos"

    @property
    def is_linux(self) -> bool:
        return self.os_family == "linux"

    def matches(self, tags: list[str] | tuple[str, ...]) -> bool:
        """Whether an applicability list includes this platform.

        Tags may name an OS family, a distro family or a package
        manager.  An empty list applies everywhere.
        """
        if not tags:
            return True
        own = {self.os_family, self.distro_family, self.package_manager}
        return any(tag in own for tag in tags)

    def describe(self) -> str:
        return (
            f"OS={self.os_family}, DISTRO={self.distro_family}, "
            f"PKG={self.package_manager}"
        )
