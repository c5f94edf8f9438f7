"""
Tool model — one entry of the provisioning catalog.

A tool is identified by the command it puts on PATH.  How it gets
installed is a map from package-manager id (or ``_default``) to an
``InstallStrategy``, mirroring the per-method recipe maps used across
the catalog.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_METHOD = "_default"


class InstallStrategy(BaseModel):
    """How to install a tool with one package manager.

    Exactly one of ``packages`` or ``procedure`` is set:

    - ``packages``: plain install through the package manager adapter
      (``cask=True`` routes brew installs through ``--cask``).
    - ``procedure``: name of a custom procedure (vendor script, release
      archive, build from source); ``args`` are passed through to it.
    """

    model_config = ConfigDict(frozen=True)

    packages: list[str] = Field(default_factory=list)
    cask: bool = False
    procedure: str | None = None
    args: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _one_kind(self) -> InstallStrategy:
        if bool(self.packages) == bool(self.procedure):
            raise ValueError("strategy needs exactly one of 'packages' or 'procedure'")
        return self

    @property
    def is_procedure(self) -> bool:
        return self.procedure is not None

    @property
    def label(self) -> str:
        if self.procedure:
            return f"procedure:{self.procedure}"
        kind = "cask" if self.cask else "packages"
        return f"{kind}:{' '.join(self.packages)}"


class Tool(BaseModel):
    """A developer tool the provisioner can ensure is present."""

    model_config = ConfigDict(frozen=True)

    name: str                                   # canonical command name
    label: str = ""
    category: str = ""
    strategies: dict[str, InstallStrategy] = Field(default_factory=dict)
    platforms: list[str] = Field(default_factory=list)  # empty = everywhere

    # Probe overrides; the default probe is "is `name` on PATH?"
    check_path: str | None = None               # ~-relative path that must exist
    check_command: list[str] | None = None      # command that must exit 0

    requires: list[str] = Field(default_factory=list)   # prerequisite binaries
    post_path: list[str] = Field(default_factory=list)  # dirs added to PATH after install

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def strategy_for(self, package_manager: str) -> tuple[str, InstallStrategy] | None:
        """Pick the strategy for a package manager, falling back to ``_default``.

        Returns:
            ``(method, strategy)`` or None when the tool cannot be
            installed with this manager.
        """
        if package_manager in self.strategies:
            return package_manager, self.strategies[package_manager]
        if DEFAULT_METHOD in self.strategies:
            return DEFAULT_METHOD, self.strategies[DEFAULT_METHOD]
        return None


class Category(BaseModel):
    """A gated batch of tools offered to the operator as one stage."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    tools: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)

    @property
    def prompt(self) -> str:
        return f"Install {self.label}?"
