"""
L3 Orchestration — The full bootstrap run.

Ties everything together: Homebrew bootstrap on macOS, the ordered
gated stages, dotfile placement, the login shell, and the summary.

Stages are independent.  A failed tool is recorded on its stage and
the run moves on; only the caller decides what the final report means.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from devkit.adapters.base import PackageManager
from devkit.adapters.registry import create_fallback_adapter, create_package_manager
from devkit.adapters.shell.command import CommandRunner
from devkit.core.config.loader import Settings
from devkit.core.errors import InstallFailure
from devkit.core.models.platform import Platform
from devkit.core.observability.logging_config import log_stage
from devkit.core.models.step import RunReport, StageOutcome, ToolPresence
from devkit.core.services.provision.data import CATEGORIES, PLACEMENTS, get_tool
from devkit.core.services.provision.data.constants import ETC_SHELLS, SUMMARY_TOOLS
from devkit.core.services.provision.detection.probe import CapabilityProber
from devkit.core.services.provision.execution.backup import BackupDirectory
from devkit.core.services.provision.execution.fonts import install_fonts
from devkit.core.services.provision.execution.login_shell import (
    is_default_shell,
    set_login_shell,
)
from devkit.core.services.provision.execution.placement import PlacementEngine
from devkit.core.services.provision.execution.procedures import Procedure, no_pause
from devkit.core.services.provision.orchestration.provisioner import Provisioner
from devkit.core.services.provision.orchestration.stages import STAGE_ORDER, Stage
from devkit.core.services.provision.progress import ProgressFn, log_progress

logger = logging.getLogger(__name__)

# (prompt, default) -> answer
ConfirmFn = Callable[[str, bool], bool]


def always_yes(prompt: str, default: bool = True) -> bool:
    """Confirmation source for non-interactive runs (``--yes``)."""
    return True


class Orchestrator:
    """Run every stage in order and build the ``RunReport``.

    Collaborators not passed in are built for the real host.  Tests
    inject a fake runner, prober and package manager.
    """

    def __init__(
        self,
        platform: Platform,
        settings: Settings,
        *,
        confirm: ConfirmFn,
        runner: CommandRunner | None = None,
        prober: CapabilityProber | None = None,
        package_manager: PackageManager | None = None,
        fallback: PackageManager | None = None,
        procedures: dict[str, Procedure] | None = None,
        pause: Callable[[str], None] = no_pause,
        on_progress: ProgressFn | None = None,
        login_shell: str | None = None,
        etc_shells: str | Path = ETC_SHELLS,
        started_at: datetime | None = None,
    ):
        self.platform = platform
        self.settings = settings
        self.confirm = confirm
        self.runner = runner or CommandRunner()
        self.prober = prober or CapabilityProber(self.runner.path)
        self.package_manager = package_manager or create_package_manager(platform, self.runner)
        if fallback is None:
            fallback = create_fallback_adapter(platform, self.runner, self.package_manager)
        self.progress = on_progress or log_progress
        self.login_shell = self.runner.env.get("SHELL", "") if login_shell is None else login_shell
        self.etc_shells = etc_shells

        self.provisioner = Provisioner(
            platform,
            self.package_manager,
            self.prober,
            self.runner,
            fallback=fallback,
            procedures=procedures,
            home=settings.home,
            pause=pause,
            on_progress=self.progress,
        )
        self.backup = BackupDirectory(
            settings.home, prefix=settings.backup_prefix, started_at=started_at,
        )
        self.placement = PlacementEngine(self.backup, on_progress=self.progress)

    # ── Stage list ──────────────────────────────────────────────

    def build_stages(self) -> list[Stage]:
        """All stages in operator-facing order (before platform filtering)."""
        by_id: dict[str, Stage] = {
            "update": Stage(
                id="update",
                label="Package manager update",
                prompt="Update package manager?",
                action=self._update,
            ),
            "fonts": Stage(
                id="fonts",
                label="Fonts",
                prompt="Install Fonts (MesloLGM Nerd Font)?",
                action=self._fonts,
            ),
            "dotfiles": Stage(
                id="dotfiles",
                label="Dotfiles",
                prompt="Symlink dotfiles to home directory?",
                action=self._dotfiles,
            ),
            "login_shell": Stage(
                id="login_shell",
                label="Default shell",
                gated=False,
                action=self._login_shell,
            ),
        }
        for category in CATEGORIES:
            by_id[category.id] = Stage(
                id=category.id,
                label=category.label,
                prompt=category.prompt,
                platforms=list(category.platforms),
                action=self._category_action(category.tools),
            )
        return [by_id[stage_id] for stage_id in STAGE_ORDER if stage_id in by_id]

    # ── Run ─────────────────────────────────────────────────────

    def run(self) -> RunReport:
        report = RunReport(platform=self.platform, dotfiles_dir=str(self.settings.dotfiles_dir))
        self.progress("info", f"Detected: {self.platform.describe()}")

        if self.platform.is_macos:
            with log_stage("bootstrap"):
                report.stages.append(self._bootstrap())

        for stage in self.build_stages():
            if not self.platform.matches(stage.platforms):
                logger.debug("Stage %s not offered on %s", stage.id, self.platform.os_family)
                continue
            if stage.id in self.settings.skip_stages:
                logger.info("Stage %s skipped by configuration", stage.id)
                outcome = stage.outcome(False)
                outcome.note = "skipped by configuration"
                report.stages.append(outcome)
                continue

            accepted = self.confirm(stage.prompt, stage.default) if stage.gated else True
            outcome = stage.outcome(accepted)
            if accepted:
                self.progress("section", stage.label)
                with log_stage(stage.id):
                    stage.action(outcome)
            report.stages.append(outcome)

        report.presence = self.summary()
        if self.backup.created:
            report.backup_dir = str(self.backup.path)
        report.next_steps = self.next_steps()
        return report

    def summary(self) -> list[ToolPresence]:
        """Re-probe every tracked tool."""
        return [ToolPresence(name=name, path=self.prober.resolve(name)) for name in SUMMARY_TOOLS]

    def next_steps(self) -> list[str]:
        steps = [
            "Restart your terminal (or run: exec zsh)",
            "Zinit will auto-install zsh plugins on first launch",
            "Open Neovim - Lazy.nvim will auto-install plugins",
        ]
        if self.platform.is_linux and self.prober.is_present("docker"):
            steps.append("Log out and back in for Docker group to take effect")
        return steps

    # ── Stage actions ───────────────────────────────────────────

    def _bootstrap(self) -> StageOutcome:
        outcome = StageOutcome(stage="bootstrap", label="Homebrew", accepted=True)
        outcome.steps.append(self.provisioner.ensure(get_tool("brew")))
        return outcome

    def _update(self, outcome: StageOutcome) -> None:
        try:
            self.package_manager.update_indexes()
        except InstallFailure as e:
            self.progress("error", str(e))
            outcome.note = str(e)
            return
        self.progress("success", "Package manager updated")

    def _category_action(self, tool_names: list[str]) -> Callable[[StageOutcome], None]:
        def action(outcome: StageOutcome) -> None:
            tools = [get_tool(name) for name in tool_names]
            outcome.steps.extend(self.provisioner.ensure_all(tools))
        return action

    def _fonts(self, outcome: StageOutcome) -> None:
        try:
            installed = install_fonts(
                self.settings.fonts_dir,
                platform=self.platform,
                home=self.settings.home,
                runner=self.runner,
                on_progress=self.progress,
            )
        except OSError as e:
            logger.warning("Font install failed: %s", e)
            self.progress("error", f"Could not install fonts: {e}")
            outcome.note = str(e)
            return
        outcome.note = f"{len(installed)} font(s) installed" if installed else "no fonts found"

    def _dotfiles(self, outcome: StageOutcome) -> None:
        entries = list(PLACEMENTS) + list(self.settings.placements)
        outcome.placements = self.placement.link_all(
            entries,
            dotfiles_dir=self.settings.dotfiles_dir,
            home=self.settings.home,
            platform=self.platform,
        )

    def _login_shell(self, outcome: StageOutcome) -> None:
        shell = self.settings.default_shell
        if is_default_shell(self.login_shell, shell):
            self.progress("success", f"{shell} is already the default shell")
            outcome.note = "already default"
            return

        if not self.confirm(f"Set {shell} as default shell?", True):
            outcome.accepted = False
            return

        shell_path = self.prober.resolve(shell)
        if shell_path is None:
            outcome.note = f"{shell} not found"
            self.progress("error", f"{shell} not found, cannot set it as default shell")
            return

        try:
            set_login_shell(shell_path, self.runner, etc_shells=self.etc_shells)
        except InstallFailure as e:
            outcome.note = str(e)
            self.progress("error", str(e))
            return
        outcome.note = shell_path
        self.progress("success", f"Default shell set to {shell} (restart terminal to take effect)")
