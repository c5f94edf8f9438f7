"""
L2 Execution — Login shell switch.

``chsh`` only accepts shells listed in ``/etc/shells``, so the shell
is registered there first when missing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import InstallFailure, PermissionFailure
from devkit.core.services.provision.data.constants import ETC_SHELLS

logger = logging.getLogger(__name__)


def is_default_shell(current: str, shell: str) -> bool:
    """Whether ``$SHELL`` (``current``) already is ``shell``."""
    return bool(current) and Path(current).name == shell


def registered_shells(etc_shells: str | Path = ETC_SHELLS) -> list[str]:
    try:
        text = Path(etc_shells).read_text(encoding="utf-8")
    except OSError:
        return []
    return [
        line.strip() for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def set_login_shell(
    shell_path: str,
    runner: CommandRunner,
    *,
    etc_shells: str | Path = ETC_SHELLS,
) -> None:
    """Register ``shell_path`` in ``/etc/shells`` if needed and ``chsh`` to it.

    Raises:
        InstallFailure: a command failed (``PermissionFailure`` when sudo
            refused the ``/etc/shells`` append).
    """
    if shell_path not in registered_shells(etc_shells):
        logger.info("Registering %s in %s", shell_path, etc_shells)
        result = runner.run(
            ["tee", "-a", str(etc_shells)], sudo=True, capture=True, input=shell_path + "\n",
        )
        if not result.ok:
            exc = PermissionFailure if result.permission_denied else InstallFailure
            raise exc("tee", [shell_path], returncode=result.returncode,
                      detail=result.error or "", action=f"register in {etc_shells}")

    result = runner.run(["chsh", "-s", shell_path])
    if not result.ok:
        raise InstallFailure("chsh", [shell_path], returncode=result.returncode,
                             detail=result.error or "", action="switch login shell to")
