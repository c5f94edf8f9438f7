"""
Command runner — the SINGLE PLACE where ``subprocess.run`` is called.

Adapters and custom procedures describe commands as argv lists and hand
them to a ``CommandRunner``.  The runner never raises for a failed
command: it returns a ``CommandResult`` and the caller decides what a
failure means.

Output is streamed to the terminal by default so the operator sees
installer progress and sudo can prompt for a password.  ``capture=True``
collects stdout/stderr instead (used for probes and API-style calls).
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from devkit.core.models.command import CommandResult

logger = logging.getLogger(__name__)

# stderr fragments that mean sudo refused us
_SUDO_REFUSED = ("incorrect password", "sorry, try again", "not in the sudoers", "a password is required")


class CommandRunner:
    """Run commands with an owned environment.

    The runner keeps its own copy of the environment so installers that
    drop binaries in non-standard places (``~/.cargo/bin``,
    ``/usr/local/go/bin``) can be made visible for the rest of the run
    with ``prepend_path()`` without touching ``os.environ``.
    """

    def __init__(self, env: dict[str, str] | None = None):
        self.env: dict[str, str] = dict(os.environ if env is None else env)

    @property
    def path(self) -> str:
        return self.env.get("PATH", "")

    def prepend_path(self, dirs: list[str] | tuple[str, ...]) -> None:
        """Put directories at the front of PATH (skipping ones already there)."""
        current = [p for p in self.path.split(os.pathsep) if p]
        for d in reversed(dirs):
            d = os.path.expanduser(d)
            if d in current:
                current.remove(d)
            current.insert(0, d)
        self.env["PATH"] = os.pathsep.join(current)

    def which(self, name: str) -> str | None:
        """Resolve an executable on the runner's PATH."""
        return shutil.which(name, path=self.path)

    @property
    def is_root(self) -> bool:
        return os.geteuid() == 0

    def run(
        self,
        cmd: list[str],
        *,
        sudo: bool = False,
        cwd: str | Path | None = None,
        capture: bool = False,
        input: str | None = None,
    ) -> CommandResult:
        """Run a command and return its result.

        Args:
            cmd: Command argv.
            sudo: Prefix with ``sudo`` unless already root.
            cwd: Working directory.
            capture: Collect stdout/stderr instead of streaming them.
            input: Text piped to stdin.

        Returns:
            CommandResult — ``ok`` is False on non-zero exit or spawn error.
        """
        argv = list(cmd)

        # ── Sudo handling ──
        if sudo and not self.is_root:
            if self.which("sudo") is None:
                logger.warning("sudo not available for: %s", " ".join(argv))
                return CommandResult(
                    command=argv,
                    returncode=1,
                    error="This step requires root and sudo is not available.",
                    permission_denied=True,
                )
            argv = ["sudo"] + argv

        logger.info("$ %s", " ".join(argv))
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                env=self.env,
                capture_output=capture,
                text=True,
                input=input,
            )
        except OSError as e:
            logger.debug("Cannot spawn %s: %s", argv[0], e)
            return CommandResult(command=argv, returncode=127, error=str(e))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout or ""
        stderr = result.stderr or ""

        if result.returncode == 0:
            return CommandResult.success(argv, stdout=stdout, stderr=stderr, elapsed_ms=elapsed_ms)

        refused = sudo and any(frag in stderr.lower() for frag in _SUDO_REFUSED)
        logger.debug("Command failed (exit %d): %s", result.returncode, " ".join(argv))
        return CommandResult.failure(
            argv,
            returncode=result.returncode,
            stdout=stdout,
            stderr=stderr[-2000:],
            elapsed_ms=elapsed_ms,
            permission_denied=refused,
        )

    def run_script(
        self,
        script: str,
        *,
        sudo: bool = False,
        cwd: str | Path | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run a bash snippet (pipes, ``&&`` chains, sourced env files)."""
        return self.run(["bash", "-c", script], sudo=sudo, cwd=cwd, capture=capture)
