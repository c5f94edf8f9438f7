"""
Shared test fixtures and configuration.

Nothing here spawns a process: commands go to a ``MockRunner`` and the
prober searches a temporary ``bin`` directory that tests populate with
fake executables.
"""

import os
from pathlib import Path

import pytest

from devkit.adapters.mock import MockRunner
from devkit.core.models.platform import Platform
from devkit.core.services.provision.detection.probe import CapabilityProber


def make_executable(directory: Path, name: str) -> Path:
    """Drop an executable stub called ``name`` into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\nexit 0\n")
    os.chmod(path, 0o755)
    return path


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """The only directory on the test PATH."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def runner(bin_dir: Path) -> MockRunner:
    return MockRunner({"PATH": str(bin_dir), "USER": "tester", "SHELL": "/bin/bash"})


@pytest.fixture
def prober(bin_dir: Path) -> CapabilityProber:
    return CapabilityProber(str(bin_dir))


@pytest.fixture
def debian() -> Platform:
    return Platform(os_family="linux", distro_family="debian", package_manager="apt", distro_id="ubuntu")


@pytest.fixture
def arch() -> Platform:
    return Platform(os_family="linux", distro_family="arch", package_manager="pacman", distro_id="arch")


@pytest.fixture
def macos() -> Platform:
    return Platform(os_family="macos", distro_family="macos", package_manager="brew", distro_id="macos", machine="arm64")


class ProgressRecorder:
    """Collects ``on_progress`` events."""

    def __init__(self):
        self.events: list[tuple[str, str]] = []

    def __call__(self, kind: str, message: str) -> None:
        self.events.append((kind, message))

    def of(self, kind: str) -> list[str]:
        return [m for k, m in self.events if k == kind]


@pytest.fixture
def progress() -> ProgressRecorder:
    return ProgressRecorder()


@pytest.fixture
def install_binary(bin_dir: Path):
    """Put a fake executable on the test PATH: ``install_binary("git")``."""

    def _install(name: str) -> Path:
        return make_executable(bin_dir, name)

    return _install
