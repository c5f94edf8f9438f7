"""
Tests for the CLI entrypoint — flags, exit codes, rendering.
"""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from devkit.core.errors import PreconditionFailure
from devkit.core.models.placement import PlacementResult
from devkit.core.models.platform import Platform
from devkit.core.models.step import ProvisioningStep, RunReport, StageOutcome, ToolPresence
from devkit.main import cli

DEBIAN = Platform(os_family="linux", distro_family="debian", package_manager="apt", distro_id="ubuntu")


def _report(**overrides) -> RunReport:
    data = dict(
        platform=DEBIAN,
        dotfiles_dir="/repo",
        presence=[ToolPresence(name="git", path="/usr/bin/git"), ToolPresence(name="gh")],
        next_steps=["Restart your terminal (or run: exec zsh)"],
    )
    data.update(overrides)
    return RunReport(**data)


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for flag in ("--yes", "--verbose", "--quiet", "--debug", "--repo", "--config"):
            assert flag in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestExitCodes:
    def test_unsupported_platform_exits_1(self, tmp_path: Path):
        with patch("devkit.main.detect_platform", side_effect=PreconditionFailure("Unsupported operating system: Plan9")):
            result = CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes"])
        assert result.exit_code == 1
        assert "Plan9" in result.output

    def test_bad_config_exits_2(self, tmp_path: Path):
        config = tmp_path / "devkit.yml"
        config.write_text("- not a mapping\n")
        result = CliRunner().invoke(cli, ["--config", str(config)])
        assert result.exit_code == 2
        assert "mapping" in result.output

    def test_missing_config_exits_2(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yml")])
        assert result.exit_code == 2

    def test_interrupt_exits_130(self, tmp_path: Path):
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.side_effect = KeyboardInterrupt
            result = CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes"])
        assert result.exit_code == 130

    def test_step_failures_still_exit_0(self, tmp_path: Path):
        report = _report(stages=[
            StageOutcome(stage="git", accepted=True, steps=[
                ProvisioningStep(tool="gh", status="failed", error="apt failed to install gh"),
            ]),
        ])
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.return_value = report
            result = CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes"])
        assert result.exit_code == 0
        assert "Installation Summary" in result.output
        assert "apt failed to install gh" in result.output


class TestWiring:
    def test_yes_confirms_everything(self, tmp_path: Path):
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.return_value = _report()
            CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes"])
        confirm = orchestrator.call_args.kwargs["confirm"]
        assert confirm("Install Docker?", False) is True

    def test_interactive_confirm_reads_stdin(self, tmp_path: Path):
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.return_value = _report()
            CliRunner().invoke(cli, ["--repo", str(tmp_path)])
            confirm = orchestrator.call_args.kwargs["confirm"]
        runner = CliRunner()
        with runner.isolation(input="n\n"):
            assert confirm("Install Docker?", True) is False

    def test_repo_sets_dotfiles_dir(self, tmp_path: Path):
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.return_value = _report()
            CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes"])
        settings = orchestrator.call_args.args[1]
        assert settings.dotfiles_dir == tmp_path.resolve()

    def test_summary_rendering(self, tmp_path: Path):
        report = _report(backup_dir="/home/me/.dotfiles-backup-20260101-000000")
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.return_value = report
            result = CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes", "--quiet"])
        assert "✓ git" in result.output
        assert "/usr/bin/git" in result.output
        assert "✗ gh" in result.output
        assert ".dotfiles-backup-20260101-000000" in result.output
        assert "exec zsh" in result.output

    def test_failed_links_rendered(self, tmp_path: Path):
        dotfiles = StageOutcome(stage="dotfiles", label="Dotfiles", accepted=True, placements=[
            PlacementResult(source="/repo/nvim", dest="/home/me/.config/nvim", status="failed",
                            error="[Errno 17] File exists: '/home/me/.config'"),
        ])
        with patch("devkit.main.detect_platform", return_value=DEBIAN), \
                patch("devkit.main.Orchestrator") as orchestrator:
            orchestrator.return_value.run.return_value = _report(stages=[dotfiles])
            result = CliRunner().invoke(cli, ["--repo", str(tmp_path), "--yes", "--quiet"])
        assert result.exit_code == 0
        assert "Failed links: 1" in result.output
        assert "/home/me/.config/nvim: [Errno 17]" in result.output
