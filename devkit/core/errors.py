"""
Error taxonomy for a provisioning run.

Only ``PreconditionFailure`` (and ``ConfigError`` from the config loader)
ever reach the CLI.  ``InstallFailure`` is raised by adapters and custom
procedures and recorded per step by the provisioner.
"""

from __future__ import annotations


class DevkitError(Exception):
    """Base class for every error raised by devkit."""


class PreconditionFailure(DevkitError):
    """The host cannot be provisioned at all (unsupported OS / manager)."""


class InstallFailure(DevkitError):
    """A single install invocation exited non-zero.

    Carries the manager (or procedure) name and the requested packages
    so the step outcome can say exactly what failed.
    """

    def __init__(
        self,
        manager: str,
        packages: list[str] | tuple[str, ...] = (),
        *,
        returncode: int | None = None,
        detail: str = "",
        action: str = "install",
    ):
        self.manager = manager
        self.action = action
        self.packages = list(packages)
        self.returncode = returncode
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        msg = f"{self.manager} failed to {self.action}"
        if self.packages:
            msg += " " + " ".join(self.packages)
        if self.returncode is not None:
            msg += f" (exit {self.returncode})"
        if self.detail:
            msg += f": {self.detail}"
        return msg


class PermissionFailure(InstallFailure):
    """An elevated-privilege install was refused (no sudo, bad password)."""
