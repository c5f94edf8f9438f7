"""
L3 Orchestration — ``ensure(tool)``: probe, install if absent, re-probe.

The provisioner composes the capability prober, the native package
manager adapter (plus the AUR fallback on Arch) and the custom
procedures.  It is the only place that turns ``InstallFailure`` into a
recorded step outcome; nothing below it ever decides what a failure
means for the run.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from devkit.adapters.base import PackageManager
from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import InstallFailure, PermissionFailure
from devkit.core.models.platform import Platform
from devkit.core.models.step import ProvisioningStep
from devkit.core.models.tool import InstallStrategy, Tool
from devkit.core.services.provision.detection.probe import CapabilityProber
from devkit.core.services.provision.execution.placement import expand_dest
from devkit.core.services.provision.execution.procedures import (
    PROCEDURES,
    Procedure,
    ProcedureContext,
    no_pause,
)
from devkit.core.services.provision.progress import ProgressFn, log_progress

logger = logging.getLogger(__name__)


class Provisioner:
    """Bring single tools to the "present" state."""

    def __init__(
        self,
        platform: Platform,
        package_manager: PackageManager,
        prober: CapabilityProber,
        runner: CommandRunner,
        *,
        fallback: PackageManager | None = None,
        procedures: dict[str, Procedure] | None = None,
        home: Path | None = None,
        pause: Callable[[str], None] = no_pause,
        on_progress: ProgressFn | None = None,
    ):
        self.platform = platform
        self.package_manager = package_manager
        self.prober = prober
        self.runner = runner
        self.fallback = fallback
        self.procedures = PROCEDURES if procedures is None else procedures
        self.home = home or Path.home()
        self.pause = pause
        self._progress = on_progress or log_progress

    # ── Probing ─────────────────────────────────────────────────

    def is_present(self, tool: Tool) -> bool:
        """Probe order: ``check_path``, then ``check_command``, then PATH."""
        if tool.check_path:
            return expand_dest(tool.check_path, self.home).exists()
        if tool.check_command:
            return self.runner.run(tool.check_command, capture=True).ok
        return self.prober.is_present(tool.name)

    # ── ensure ──────────────────────────────────────────────────

    def ensure(self, tool: Tool) -> ProvisioningStep:
        """Make ``tool`` present.  Never raises ``InstallFailure``."""
        start = time.monotonic()

        def step(status: str, method: str = "", error: str | None = None) -> ProvisioningStep:
            return ProvisioningStep(
                tool=tool.name,
                status=status,
                method=method,
                error=error,
                elapsed_ms=int((time.monotonic() - start) * 1000),
            )

        if not self.platform.matches(tool.platforms):
            logger.debug("%s not applicable on %s", tool.name, self.platform.describe())
            return step("skipped")

        if self.is_present(tool):
            self._progress("success", f"{tool.display_name} already installed")
            return step("already_present")

        missing = [r for r in tool.requires if not self.prober.is_present(r)]
        if missing:
            error = f"requires {', '.join(missing)}"
            self._progress("error", f"{tool.display_name} {error}, skipping")
            return step("failed", error=error)

        selected = tool.strategy_for(self.platform.package_manager)
        if selected is None:
            error = f"no install method for {self.platform.package_manager}"
            self._progress("error", f"{tool.display_name}: {error}")
            return step("failed", error=error)
        method, strategy = selected

        self._progress("info", f"Installing {tool.display_name} ({strategy.label})...")
        try:
            method = self._install(tool, method, strategy)
        except InstallFailure as e:
            logger.warning("Install of %s failed: %s", tool.name, e)
            self._progress("error", f"Failed to install {tool.display_name}: {e}")
            return step("failed", method, str(e))

        if tool.post_path:
            dirs = [str(expand_dest(d, self.home)) for d in tool.post_path]
            self.runner.prepend_path(dirs)
            self.prober.prepend(dirs)

        if not self.is_present(tool):
            error = f"{tool.name} still not found after install"
            self._progress("error", f"{tool.display_name}: {error}")
            return step("failed", method, error)

        self._progress("success", f"{tool.display_name} installed")
        return step("installed", method)

    def ensure_all(self, tools: list[Tool]) -> list[ProvisioningStep]:
        """``ensure`` each tool in order; one failure never stops the rest."""
        return [self.ensure(tool) for tool in tools]

    # ── Install strategies ──────────────────────────────────────

    def _install(self, tool: Tool, method: str, strategy: InstallStrategy) -> str:
        """Run one strategy.  Returns the method that actually succeeded."""
        if strategy.is_procedure:
            self._run_procedure(tool, strategy)
            return method

        packages = list(strategy.packages)
        if strategy.cask:
            install_casks = getattr(self.package_manager, "install_casks", None)
            if install_casks is None:
                raise InstallFailure(
                    self.package_manager.name, packages,
                    detail="casks are only supported by brew",
                )
            install_casks(packages)
            return method

        try:
            self.package_manager.install_packages(packages)
        except PermissionFailure:
            raise
        except InstallFailure as e:
            if self.fallback is None:
                raise
            self._progress(
                "warn",
                f"{self.package_manager.name} could not install {' '.join(packages)}, "
                f"trying {self.fallback.name}",
            )
            logger.info("Falling back to %s after: %s", self.fallback.name, e)
            self.fallback.install_packages(packages)
            return self.fallback.name
        return method

    def _run_procedure(self, tool: Tool, strategy: InstallStrategy) -> None:
        name = strategy.procedure or ""
        procedure = self.procedures.get(name)
        if procedure is None:
            raise InstallFailure(name or tool.name, [tool.name], detail="unknown procedure")

        ctx = ProcedureContext(
            procedure=name,
            platform=self.platform,
            runner=self.runner,
            prober=self.prober,
            package_manager=self.package_manager,
            home=self.home,
            pause=self.pause,
            progress=self._progress,
        )
        try:
            procedure(ctx, dict(strategy.args))
        except InstallFailure:
            raise
        except (OSError, KeyError, TypeError) as e:
            logger.debug("Procedure %s raised", name, exc_info=True)
            raise InstallFailure(name, [tool.name], detail=f"{type(e).__name__}: {e}") from e
