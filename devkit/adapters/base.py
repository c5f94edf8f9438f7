"""
Package manager base — the contract between the provisioner and a
native package manager.

The provisioner only talks to package managers through this interface:
two verbs, ``update_indexes()`` and ``install_packages(names)``, each
mapped to exactly one native invocation by the concrete adapter.  The
adapter for the host is picked once at startup (see ``registry``).

Unlike the command runner, adapters DO raise: a failed invocation
becomes ``InstallFailure`` (or ``PermissionFailure`` when sudo refused)
carrying the manager name and package list.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import InstallFailure, PermissionFailure
from devkit.core.models.command import CommandResult


class PackageManager(ABC):
    """Abstract base class for package manager adapters.

    To add a package manager:
        1. Subclass PackageManager
        2. Implement name, index_command, install_command
        3. Register it in ``registry.PACKAGE_MANAGERS``
    """

    #: Whether native invocations run through sudo.
    needs_sudo: bool = True

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    @property
    @abstractmethod
    def name(self) -> str:
        """The manager identifier ('apt', 'pacman', 'brew', ...)."""

    @property
    def executable(self) -> str:
        return self.name

    @abstractmethod
    def index_command(self) -> list[str]:
        """Native argv that refreshes package indexes."""

    @abstractmethod
    def install_command(self, names: list[str]) -> list[str]:
        """Native argv that installs ``names`` non-interactively."""

    def is_available(self) -> bool:
        """Whether the manager's executable is on PATH."""
        return self._runner.which(self.executable) is not None

    def update_indexes(self) -> None:
        """Refresh package indexes.

        Raises:
            InstallFailure: The refresh command failed.
        """
        result = self._runner.run(self.index_command(), sudo=self.needs_sudo)
        self._raise_for(result, [], action="refresh package indexes")

    def install_packages(self, names: list[str]) -> None:
        """Install packages non-interactively.

        Raises:
            InstallFailure: The install command failed.
            PermissionFailure: sudo was unavailable or refused.
        """
        if not names:
            return
        result = self._runner.run(self.install_command(names), sudo=self.needs_sudo)
        self._raise_for(result, names)

    def _raise_for(
        self,
        result: CommandResult,
        packages: list[str],
        *,
        action: str = "install",
    ) -> None:
        if result.ok:
            return
        error_cls = PermissionFailure if result.permission_denied else InstallFailure
        raise error_cls(
            self.name,
            packages,
            returncode=result.returncode,
            detail=result.error or "",
            action=action,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
