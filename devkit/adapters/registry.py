"""
Package manager registry — picks the adapter for the host, once.

The provisioner never branches on the manager id at call sites; it
receives the adapter built here at startup.
"""

from __future__ import annotations

import logging

from devkit.adapters.base import PackageManager
from devkit.adapters.packages.apt import AptAdapter
from devkit.adapters.packages.aur import AurAdapter
from devkit.adapters.packages.brew import BrewAdapter
from devkit.adapters.packages.pacman import PacmanAdapter
from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import PreconditionFailure
from devkit.core.models.platform import Platform

logger = logging.getLogger(__name__)

PACKAGE_MANAGERS: dict[str, type[PackageManager]] = {
    "apt": AptAdapter,
    "pacman": PacmanAdapter,
    "brew": BrewAdapter,
}


def create_package_manager(platform: Platform, runner: CommandRunner) -> PackageManager:
    """Build the native adapter for ``platform.package_manager``.

    Raises:
        PreconditionFailure: No adapter exists for the manager.
    """
    adapter_cls = PACKAGE_MANAGERS.get(platform.package_manager)
    if adapter_cls is None:
        raise PreconditionFailure(
            f"No adapter for package manager: {platform.package_manager}"
        )
    adapter = adapter_cls(runner)
    logger.debug("Package manager adapter: %r", adapter)
    return adapter


def create_fallback_adapter(
    platform: Platform,
    runner: CommandRunner,
    native: PackageManager,
) -> AurAdapter | None:
    """The community-source adapter — Arch family only, else None."""
    if platform.distro_family != "arch" or not isinstance(native, PacmanAdapter):
        return None
    return AurAdapter(runner, native)
