"""
CommandResult — the outcome of one subprocess invocation.

The runner NEVER raises for a non-zero exit: failures are captured
here and translated into ``InstallFailure`` by whoever asked for the
command (package manager adapters, custom procedures).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Result of running a single command."""

    command: list[str] = Field(default_factory=list)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    error: str | None = None        # spawn error (missing binary, OSError)
    permission_denied: bool = False  # sudo unavailable or refused
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the command ran and exited 0."""
        return self.error is None and self.returncode == 0

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def display(self) -> str:
        """The command as the operator would type it."""
        return " ".join(self.command)

    @classmethod
    def success(cls, command: list[str], stdout: str = "", **kwargs) -> CommandResult:
        """Create a success result."""
        return cls(command=command, returncode=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        command: list[str],
        returncode: int = 1,
        stderr: str = "",
        **kwargs,
    ) -> CommandResult:
        """Create a failed result."""
        return cls(command=command, returncode=returncode, stderr=stderr, **kwargs)
