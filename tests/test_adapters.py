"""
Tests for the command runner, package manager adapters and registry.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from devkit.adapters.mock import MockRunner
from devkit.adapters.packages import AptAdapter, AurAdapter, BrewAdapter, PacmanAdapter
from devkit.adapters.packages.aur import YAY_BIN_REPO
from devkit.adapters.registry import create_fallback_adapter, create_package_manager
from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import InstallFailure, PermissionFailure, PreconditionFailure
from devkit.core.models.command import CommandResult
from devkit.core.models.platform import Platform

# ── Command runner ───────────────────────────────────────────────────


class TestCommandRunner:
    def _completed(self, argv, returncode=0, stdout="", stderr=""):
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)

    def test_success(self):
        runner = CommandRunner({"PATH": "/usr/bin"})
        with patch("devkit.adapters.shell.command.subprocess.run") as run:
            run.return_value = self._completed(["echo"], stdout="hi\n")
            result = runner.run(["echo", "hi"], capture=True)
        assert result.ok
        assert result.stdout == "hi\n"
        assert run.call_args.kwargs["env"] == {"PATH": "/usr/bin"}
        assert run.call_args.kwargs["capture_output"] is True

    def test_non_zero_exit_is_a_result_not_an_exception(self):
        runner = CommandRunner({"PATH": "/usr/bin"})
        with patch("devkit.adapters.shell.command.subprocess.run") as run:
            run.return_value = self._completed(["false"], returncode=3, stderr="bad")
            result = runner.run(["false"])
        assert result.failed
        assert result.returncode == 3
        assert not result.permission_denied

    def test_spawn_error_becomes_failed_result(self):
        runner = CommandRunner({"PATH": "/usr/bin"})
        with patch("devkit.adapters.shell.command.subprocess.run", side_effect=FileNotFoundError("nope")):
            result = runner.run(["no-such-binary"])
        assert result.returncode == 127
        assert result.error
        assert not result.ok

    def test_sudo_prefix_when_not_root(self, bin_dir: Path, install_binary):
        install_binary("sudo")
        runner = CommandRunner({"PATH": str(bin_dir)})
        with patch.object(CommandRunner, "is_root", False), \
                patch("devkit.adapters.shell.command.subprocess.run") as run:
            run.return_value = self._completed([])
            runner.run(["apt", "update"], sudo=True)
        assert run.call_args.args[0] == ["sudo", "apt", "update"]

    def test_no_sudo_prefix_as_root(self):
        runner = CommandRunner({"PATH": "/usr/bin"})
        with patch.object(CommandRunner, "is_root", True), \
                patch("devkit.adapters.shell.command.subprocess.run") as run:
            run.return_value = self._completed([])
            runner.run(["apt", "update"], sudo=True)
        assert run.call_args.args[0] == ["apt", "update"]

    def test_missing_sudo_is_permission_denied(self, bin_dir: Path):
        runner = CommandRunner({"PATH": str(bin_dir)})
        with patch.object(CommandRunner, "is_root", False), \
                patch("devkit.adapters.shell.command.subprocess.run") as run:
            result = runner.run(["apt", "update"], sudo=True)
        run.assert_not_called()
        assert result.permission_denied

    def test_sudo_refusal_detected(self, bin_dir: Path, install_binary):
        install_binary("sudo")
        runner = CommandRunner({"PATH": str(bin_dir)})
        with patch.object(CommandRunner, "is_root", False), \
                patch("devkit.adapters.shell.command.subprocess.run") as run:
            run.return_value = self._completed([], returncode=1, stderr="Sorry, try again.\n")
            result = runner.run(["apt", "update"], sudo=True, capture=True)
        assert result.permission_denied

    def test_prepend_path(self):
        runner = CommandRunner({"PATH": "/usr/bin:/bin"})
        runner.prepend_path(["/opt/go/bin", "/usr/bin"])
        assert runner.path == "/opt/go/bin:/usr/bin:/bin"

    def test_run_script_uses_bash(self):
        runner = CommandRunner({"PATH": "/usr/bin"})
        with patch("devkit.adapters.shell.command.subprocess.run") as run:
            run.return_value = self._completed([])
            runner.run_script("echo a | cat")
        assert run.call_args.args[0] == ["bash", "-c", "echo a | cat"]


# ── Native adapters ──────────────────────────────────────────────────


class TestAptAdapter:
    def test_update_indexes(self, runner: MockRunner):
        AptAdapter(runner).update_indexes()
        assert runner.commands == [["sudo", "apt", "update", "-qq"]]

    def test_install_packages(self, runner: MockRunner):
        AptAdapter(runner).install_packages(["git", "curl"])
        assert runner.commands == [["sudo", "apt", "install", "-y", "-qq", "git", "curl"]]

    def test_install_nothing_is_noop(self, runner: MockRunner):
        AptAdapter(runner).install_packages([])
        assert runner.call_count == 0

    def test_failure_raises_install_failure(self, runner: MockRunner):
        runner.set_failure(("apt", "install"), returncode=100)
        with pytest.raises(InstallFailure) as excinfo:
            AptAdapter(runner).install_packages(["nope"])
        assert excinfo.value.manager == "apt"
        assert excinfo.value.packages == ["nope"]
        assert excinfo.value.returncode == 100
        assert not isinstance(excinfo.value, PermissionFailure)

    def test_permission_failure(self, runner: MockRunner):
        runner.set_failure(("apt", "update"), permission_denied=True)
        with pytest.raises(PermissionFailure):
            AptAdapter(runner).update_indexes()

    def test_as_root_no_sudo(self):
        runner = MockRunner(root=True)
        AptAdapter(runner).install_packages(["git"])
        assert runner.commands == [["apt", "install", "-y", "-qq", "git"]]


class TestPacmanAdapter:
    def test_update_indexes(self, runner: MockRunner):
        PacmanAdapter(runner).update_indexes()
        assert runner.commands == [["sudo", "pacman", "-Sy", "--noconfirm"]]

    def test_install_packages(self, runner: MockRunner):
        PacmanAdapter(runner).install_packages(["tmux"])
        assert runner.commands == [["sudo", "pacman", "-S", "--noconfirm", "--needed", "tmux"]]


class TestBrewAdapter:
    def test_no_sudo(self, runner: MockRunner):
        brew = BrewAdapter(runner)
        brew.update_indexes()
        brew.install_packages(["tmux"])
        assert runner.commands == [["brew", "update"], ["brew", "install", "tmux"]]

    def test_casks(self, runner: MockRunner):
        BrewAdapter(runner).install_casks(["ghostty"])
        assert runner.commands == [["brew", "install", "--cask", "ghostty"]]

    def test_cask_failure(self, runner: MockRunner):
        runner.set_failure(("brew", "install", "--cask"))
        with pytest.raises(InstallFailure):
            BrewAdapter(runner).install_casks(["orbstack"])


# ── AUR fallback adapter ─────────────────────────────────────────────


class TestAurAdapter:
    def test_uses_installed_helper(self, runner: MockRunner, install_binary):
        install_binary("paru")
        aur = AurAdapter(runner, PacmanAdapter(runner))
        aur.install_packages(["ghostty-git"])
        assert runner.commands == [["paru", "-S", "--noconfirm", "--needed", "ghostty-git"]]

    def test_prefers_yay(self, runner: MockRunner, install_binary):
        install_binary("paru")
        install_binary("yay")
        assert AurAdapter(runner, PacmanAdapter(runner)).helper() == "yay"

    def test_bootstraps_yay_then_retries_once(self, runner: MockRunner):
        aur = AurAdapter(runner, PacmanAdapter(runner))
        aur.install_packages(["lazygit-bin"])

        commands = runner.commands
        assert commands[0] == ["sudo", "pacman", "-S", "--noconfirm", "--needed", "git", "base-devel"]
        assert commands[1][:3] == ["git", "clone", YAY_BIN_REPO]
        assert commands[2] == ["makepkg", "-si", "--noconfirm"]
        assert runner.call_log[2].cwd == commands[1][3]
        assert commands[3] == ["yay", "-S", "--noconfirm", "--needed", "lazygit-bin"]
        assert len(commands) == 4

    def test_bootstrap_checkout_removed(self, runner: MockRunner):
        AurAdapter(runner, PacmanAdapter(runner)).install_packages(["x"])
        checkout = Path(runner.commands[1][3])
        assert not checkout.parent.exists()

    def test_makepkg_failure(self, runner: MockRunner):
        runner.set_failure(("makepkg",))
        with pytest.raises(InstallFailure, match="yay-bin"):
            AurAdapter(runner, PacmanAdapter(runner)).install_packages(["x"])
        assert not runner.called("yay")

    def test_helper_failure(self, runner: MockRunner, install_binary):
        install_binary("yay")
        runner.set_failure(("yay",))
        with pytest.raises(InstallFailure) as excinfo:
            AurAdapter(runner, PacmanAdapter(runner)).install_packages(["x"])
        assert excinfo.value.manager == "aur"


# ── Registry ─────────────────────────────────────────────────────────


class TestRegistry:
    def test_apt(self, debian: Platform, runner: MockRunner):
        assert isinstance(create_package_manager(debian, runner), AptAdapter)

    def test_brew(self, macos: Platform, runner: MockRunner):
        assert isinstance(create_package_manager(macos, runner), BrewAdapter)

    def test_unknown_manager(self, runner: MockRunner):
        fake = Platform.model_construct(os_family="linux", distro_family="unknown", package_manager="dnf")
        with pytest.raises(PreconditionFailure):
            create_package_manager(fake, runner)

    def test_fallback_only_on_arch(self, arch: Platform, debian: Platform, runner: MockRunner):
        pacman = create_package_manager(arch, runner)
        assert isinstance(create_fallback_adapter(arch, runner, pacman), AurAdapter)
        apt = create_package_manager(debian, runner)
        assert create_fallback_adapter(debian, runner, apt) is None


class TestMockRunner:
    def test_result_carries_executed_argv(self, runner: MockRunner):
        runner.set_response(("dpkg",), CommandResult.success([], stdout="amd64\n"))
        result = runner.run(["dpkg", "--print-architecture"], capture=True)
        assert result.stdout == "amd64\n"
        assert result.command == ["dpkg", "--print-architecture"]
