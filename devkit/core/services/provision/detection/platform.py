"""
L1 Detection — Platform detector.

Maps the host to a ``Platform``: OS family, distribution family and
the package manager every later stage will use.  Runs once per process.
"""

from __future__ import annotations

import logging
import platform as _platform
import shutil
from pathlib import Path
from typing import Callable

from devkit.core.errors import PreconditionFailure
from devkit.core.models.platform import Platform
from devkit.core.services.provision.data.constants import (
    ARCH_DISTRO_IDS,
    DEBIAN_DISTRO_IDS,
    OS_RELEASE_PATH,
    PACKAGE_MANAGER_PROBE_ORDER,
)

logger = logging.getLogger(__name__)


def parse_os_release(text: str) -> dict[str, str]:
    """Parse ``/etc/os-release`` content into a dict.

    Handles ``KEY=value``, ``KEY="quoted value"`` and comments.
    """
    info: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        info[key.strip()] = value.strip().strip('"').strip("'")
    return info


def classify_distro(distro_id: str, id_like: str = "") -> tuple[str, str] | None:
    """Map an os-release ID (then ID_LIKE) to ``(distro_family, manager)``.

    Returns None when neither is a known distribution.
    """
    candidates = [distro_id.lower()] + id_like.lower().split()
    for candidate in candidates:
        if candidate in DEBIAN_DISTRO_IDS:
            return "debian", "apt"
        if candidate in ARCH_DISTRO_IDS:
            return "arch", "pacman"
    return None


def read_os_release(path: Path) -> dict[str, str]:
    try:
        return parse_os_release(path.read_text(encoding="utf-8"))
    except OSError:
        logger.debug("No readable os-release at %s", path)
        return {}


def detect_platform(
    *,
    system: str | None = None,
    os_release: Path | str = OS_RELEASE_PATH,
    which: Callable[[str], str | None] = shutil.which,
    machine: str | None = None,
) -> Platform:
    """Detect the host platform.

    Args:
        system: ``uname -s`` value (default: ``platform.system()``).
        os_release: Path to the OS identity file (Linux only).
        which: Executable lookup used for the package-manager fallback.
        machine: ``uname -m`` value (default: ``platform.machine()``).

    Returns:
        The detected Platform.

    Raises:
        PreconditionFailure: Unsupported OS, or a Linux distribution
            whose package manager cannot be inferred.
    """
    system = system if system is not None else _platform.system()
    machine = machine if machine is not None else _platform.machine()

    if system == "Darwin":
        detected = Platform(
            os_family="macos",
            distro_family="macos",
            package_manager="brew",
            distro_id="macos",
            machine=machine,
        )
        logger.info("Detected: %s", detected.describe())
        return detected

    if system != "Linux":
        raise PreconditionFailure(f"Unsupported operating system: {system or 'unknown'}")

    info = read_os_release(Path(os_release))
    distro_id = info.get("ID", "")

    classified = classify_distro(distro_id, info.get("ID_LIKE", ""))
    if classified is None:
        # Unknown distribution: probe for a package manager
        for manager, family in PACKAGE_MANAGER_PROBE_ORDER:
            if which(manager):
                classified = (family, manager)
                break

    if classified is None:
        raise PreconditionFailure(
            f"Unsupported Linux distribution: {distro_id or 'unknown'}"
        )

    family, manager = classified
    detected = Platform(
        os_family="linux",
        distro_family=family,
        package_manager=manager,
        distro_id=distro_id,
        machine=machine,
    )
    logger.info("Detected: %s", detected.describe())
    return detected
