"""
Mock runner — test double for every command devkit would spawn.

Never touches the host.  Records each call, returns success by
default, and can be configured per command prefix to fail or to run a
side effect (e.g. drop a fake binary on PATH to simulate an install).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from devkit.adapters.shell.command import CommandRunner
from devkit.core.models.command import CommandResult


@dataclass
class MockCall:
    """One recorded ``run()`` invocation."""

    argv: list[str]             # as executed, ``sudo`` prefix included
    sudo: bool = False
    cwd: str | None = None
    input: str | None = None

    @property
    def command(self) -> list[str]:
        """The argv without the ``sudo`` prefix."""
        return self.argv[1:] if self.sudo and self.argv[:1] == ["sudo"] else self.argv


class MockRunner(CommandRunner):
    """A ``CommandRunner`` that records instead of executing.

    Responses and side effects match on a command prefix, compared
    against the argv WITHOUT ``sudo``: ``("apt", "install")`` matches
    ``sudo apt install -y -qq git``.
    """

    def __init__(self, env: dict[str, str] | None = None, *, root: bool = False):
        super().__init__(env if env is not None else {"PATH": "/usr/bin:/bin"})
        self._root = root
        self._responses: list[tuple[tuple[str, ...], CommandResult]] = []
        self._effects: list[tuple[tuple[str, ...], Callable[[list[str]], None]]] = []
        self._call_log: list[MockCall] = []

    @property
    def is_root(self) -> bool:
        return self._root

    @property
    def call_log(self) -> list[MockCall]:
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[list[str]]:
        """Every argv as executed."""
        return [call.argv for call in self._call_log]

    def called(self, *prefix: str) -> bool:
        """Whether any command (sudo stripped) started with ``prefix``."""
        return any(_matches(call.command, prefix) for call in self._call_log)

    # ── Configuration ───────────────────────────────────────────

    def set_response(self, prefix: tuple[str, ...], result: CommandResult) -> None:
        self._responses.insert(0, (tuple(prefix), result))

    def set_failure(
        self,
        prefix: tuple[str, ...],
        *,
        returncode: int = 1,
        stderr: str = "mock failure",
        permission_denied: bool = False,
    ) -> None:
        """Make commands starting with ``prefix`` exit non-zero."""
        self.set_response(
            prefix,
            CommandResult.failure(
                list(prefix), returncode=returncode, stderr=stderr,
                permission_denied=permission_denied,
            ),
        )

    def on_command(self, prefix: tuple[str, ...], effect: Callable[[list[str]], None]) -> None:
        """Run ``effect(argv)`` whenever a matching command succeeds."""
        self._effects.append((tuple(prefix), effect))

    def reset(self) -> None:
        self._call_log.clear()
        self._responses.clear()
        self._effects.clear()

    # ── CommandRunner ───────────────────────────────────────────

    def run(
        self,
        cmd: list[str],
        *,
        sudo: bool = False,
        cwd: str | Path | None = None,
        capture: bool = False,
        input: str | None = None,
    ) -> CommandResult:
        use_sudo = sudo and not self._root
        argv = (["sudo"] if use_sudo else []) + list(cmd)
        self._call_log.append(
            MockCall(argv=argv, sudo=use_sudo, cwd=str(cwd) if cwd is not None else None, input=input)
        )

        for prefix, result in self._responses:
            if _matches(list(cmd), prefix):
                return result.model_copy(update={"command": argv})

        for prefix, effect in self._effects:
            if _matches(list(cmd), prefix):
                effect(argv)
        return CommandResult.success(argv)


def _matches(argv: list[str], prefix: tuple[str, ...]) -> bool:
    return tuple(argv[: len(prefix)]) == prefix
