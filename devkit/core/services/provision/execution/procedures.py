"""
L2 Execution — Custom install procedures.

Tools that no single package-manager call can install (vendor scripts,
third-party apt repositories, release tarballs, source builds) name a
procedure here instead of a package list.

Each procedure is a plain function ``(ctx, args) -> None`` registered in
``PROCEDURES``.  Procedures raise ``InstallFailure`` on the first
failed command; the provisioner records it and re-probes.
"""

from __future__ import annotations

import getpass
import http.client
import json
import logging
import tempfile
import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from devkit.adapters.base import PackageManager
from devkit.adapters.shell.command import CommandRunner
from devkit.core.errors import InstallFailure, PermissionFailure
from devkit.core.models.command import CommandResult
from devkit.core.models.platform import Platform
from devkit.core.services.provision.data.constants import (
    APT_KEYRINGS_DIR,
    DOCKER_APT_PACKAGES,
    DOCKER_APT_SOURCE,
    DOCKER_GPG_URL,
    DOTNET_SDK_PACKAGE,
    GH_APT_SOURCE,
    GH_KEYRING_URL,
    GHOSTTY_APT_BUILD_DEPS,
    GHOSTTY_REPO,
    GO_DOWNLOAD_URL,
    GO_RELEASES_URL,
    GO_ROOT,
    HOMEBREW_INSTALL_URL,
    HOMEBREW_PREFIXES,
    LAZYGIT_ASSET,
    LAZYGIT_REPO,
    MICROSOFT_PROD_DEB_URL,
    NVM_INSTALL_URL,
    OS_RELEASE_PATH,
    RUSTUP_URL,
    STARSHIP_INSTALL_URL,
    ZIG_DOWNLOAD_URL,
    ZIG_VERSION,
)
from devkit.core.services.provision.detection.platform import read_os_release
from devkit.core.services.provision.detection.probe import CapabilityProber
from devkit.core.services.provision.progress import ProgressFn, log_progress

logger = logging.getLogger(__name__)


def no_pause(message: str) -> None:
    logger.info("Not waiting for operator: %s", message)


@dataclass
class ProcedureContext:
    """Everything a procedure may touch, bound to one tool install."""

    procedure: str
    platform: Platform
    runner: CommandRunner
    prober: CapabilityProber
    package_manager: PackageManager
    home: Path = field(default_factory=Path.home)
    pause: Callable[[str], None] = no_pause
    progress: ProgressFn = log_progress

    # ── Command helpers ─────────────────────────────────────────

    def _check(self, result: CommandResult) -> CommandResult:
        if result.ok:
            return result
        exc = PermissionFailure if result.permission_denied else InstallFailure
        raise exc(
            self.procedure,
            returncode=result.returncode,
            detail=result.error or f"`{result.display}` failed",
            action="run",
        )

    def run(
        self,
        cmd: list[str],
        *,
        sudo: bool = False,
        cwd: str | Path | None = None,
        capture: bool = False,
        input: str | None = None,
        check: bool = True,
    ) -> CommandResult:
        result = self.runner.run(cmd, sudo=sudo, cwd=cwd, capture=capture, input=input)
        return self._check(result) if check else result

    def script(self, script: str, *, sudo: bool = False, cwd: str | Path | None = None) -> CommandResult:
        return self._check(self.runner.run_script(script, sudo=sudo, cwd=cwd))

    def output(self, cmd: list[str]) -> str:
        """Run a query command and return its stripped stdout."""
        return self.run(cmd, capture=True).stdout.strip()

    def write_root_file(self, path: str, content: str) -> None:
        """Write a root-owned file through ``sudo tee``."""
        self.run(["tee", path], sudo=True, capture=True, input=content)

    def add_to_path(self, dirs: list[str]) -> None:
        """Make freshly installed binaries visible for the rest of the run."""
        self.runner.prepend_path(dirs)
        self.prober.prepend(dirs)

    def fetch_json(self, url: str) -> Any:
        """GET a JSON document (GitHub API, go.dev release list)."""
        req = urllib.request.Request(
            url,
            headers={"Accept": "application/json", "User-Agent": "devkit-bootstrap"},
        )
        try:
            with urllib.request.urlopen(req) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except (OSError, http.client.HTTPException, ValueError) as e:
            raise InstallFailure(self.procedure, action="fetch", detail=f"{url}: {e}") from e

    def debian_arch(self) -> str:
        return self.output(["dpkg", "--print-architecture"])


Procedure = Callable[[ProcedureContext, dict[str, str]], None]


# ── Bootstrap ───────────────────────────────────────────────────


def homebrew(ctx: ProcedureContext, args: dict[str, str]) -> None:
    ctx.script(f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"')
    for prefix in HOMEBREW_PREFIXES:
        if (Path(prefix) / "bin" / "brew").exists():
            ctx.add_to_path([f"{prefix}/bin", f"{prefix}/sbin"])
            return
    logger.warning("Homebrew installed but brew not found under %s", HOMEBREW_PREFIXES)


# ── Vendor install scripts ──────────────────────────────────────


def starship_script(ctx: ProcedureContext, args: dict[str, str]) -> None:
    ctx.script(f"curl -sS {STARSHIP_INSTALL_URL} | sh -s -- -y")


def nvm_script(ctx: ProcedureContext, args: dict[str, str]) -> None:
    """Install nvm, then Node LTS through it in the same shell."""
    ctx.script(
        f"curl -o- {NVM_INSTALL_URL} | bash"
        ' && export NVM_DIR="$HOME/.nvm"'
        ' && . "$NVM_DIR/nvm.sh"'
        " && nvm install --lts"
    )
    # nvm only touches the child shell's PATH; surface node/npm for
    # later steps (opencode needs npm)
    node_bin = _latest_nvm_node_bin(ctx.home / ".nvm")
    if node_bin is not None:
        ctx.add_to_path([str(node_bin)])


def _latest_nvm_node_bin(nvm_dir: Path) -> Path | None:
    versions = nvm_dir / "versions" / "node"
    if not versions.is_dir():
        return None

    def key(p: Path) -> tuple[int, ...]:
        try:
            return tuple(int(x) for x in p.name.lstrip("v").split("."))
        except ValueError:
            return (0,)

    candidates = sorted((p for p in versions.iterdir() if (p / "bin").is_dir()), key=key)
    return candidates[-1] / "bin" if candidates else None


def rustup_script(ctx: ProcedureContext, args: dict[str, str]) -> None:
    ctx.script(f"curl --proto '=https' --tlsv1.2 -sSf {RUSTUP_URL} | sh -s -- -y")


def npm_global(ctx: ProcedureContext, args: dict[str, str]) -> None:
    ctx.run(["npm", "install", "-g", args["package"]])


# ── apt: third-party repositories ──────────────────────────────


def neovim_ppa(ctx: ProcedureContext, args: dict[str, str]) -> None:
    pm = ctx.package_manager
    pm.install_packages(["software-properties-common"])
    ctx.run(["add-apt-repository", "-y", "ppa:neovim-ppa/stable"], sudo=True)
    pm.update_indexes()
    pm.install_packages(["neovim"])


def gh_apt_repo(ctx: ProcedureContext, args: dict[str, str]) -> None:
    keyring = f"{APT_KEYRINGS_DIR}/githubcli-archive-keyring.gpg"
    ctx.run(["mkdir", "-p", "-m", "755", APT_KEYRINGS_DIR], sudo=True)
    ctx.script(f"curl -fsSL {GH_KEYRING_URL} | sudo tee {keyring} > /dev/null")
    ctx.run(["chmod", "go+r", keyring], sudo=True)
    ctx.write_root_file(
        "/etc/apt/sources.list.d/github-cli.list",
        GH_APT_SOURCE.format(arch=ctx.debian_arch()) + "\n",
    )
    ctx.package_manager.update_indexes()
    ctx.package_manager.install_packages(["gh"])


def dotnet_microsoft_repo(ctx: ProcedureContext, args: dict[str, str]) -> None:
    release = ctx.output(["lsb_release", "-rs"])
    with tempfile.TemporaryDirectory(prefix="devkit-dotnet-") as tmp:
        deb = Path(tmp) / "packages-microsoft-prod.deb"
        ctx.run(["curl", "-fsSL", MICROSOFT_PROD_DEB_URL.format(release=release), "-o", str(deb)])
        ctx.run(["dpkg", "-i", str(deb)], sudo=True)
    ctx.package_manager.update_indexes()
    ctx.package_manager.install_packages([DOTNET_SDK_PACKAGE])


def docker_apt(ctx: ProcedureContext, args: dict[str, str]) -> None:
    info = read_os_release(Path(OS_RELEASE_PATH))
    codename = info.get("UBUNTU_CODENAME") or info.get("VERSION_CODENAME", "")
    if not codename:
        raise InstallFailure(
            ctx.procedure, action="resolve",
            detail=f"no release codename in {OS_RELEASE_PATH}",
        )

    pm = ctx.package_manager
    keyring = f"{APT_KEYRINGS_DIR}/docker.gpg"
    pm.install_packages(["ca-certificates", "curl", "gnupg"])
    ctx.run(["install", "-m", "0755", "-d", APT_KEYRINGS_DIR], sudo=True)
    ctx.script(f"curl -fsSL {DOCKER_GPG_URL} | sudo gpg --dearmor --yes -o {keyring}")
    ctx.run(["chmod", "a+r", keyring], sudo=True)

    ctx.write_root_file(
        "/etc/apt/sources.list.d/docker.list",
        DOCKER_APT_SOURCE.format(arch=ctx.debian_arch(), codename=codename) + "\n",
    )
    pm.update_indexes()
    pm.install_packages(list(DOCKER_APT_PACKAGES))
    _join_docker_group(ctx)


def docker_pacman(ctx: ProcedureContext, args: dict[str, str]) -> None:
    ctx.package_manager.install_packages(["docker", "docker-compose"])
    ctx.run(["systemctl", "enable", "--now", "docker.service"], sudo=True)
    _join_docker_group(ctx)


def _join_docker_group(ctx: ProcedureContext) -> None:
    user = ctx.runner.env.get("USER") or getpass.getuser()
    ctx.run(["usermod", "-aG", "docker", user], sudo=True)
    ctx.progress("info", f"Added {user} to docker group (log out and back in to take effect)")


# ── Release archives ────────────────────────────────────────────


def lazygit_release(ctx: ProcedureContext, args: dict[str, str]) -> None:
    release = ctx.fetch_json(f"https://api.github.com/repos/{LAZYGIT_REPO}/releases/latest")
    tag = release.get("tag_name") if isinstance(release, dict) else None
    version = tag.lstrip("v") if isinstance(tag, str) else ""
    if not version:
        raise InstallFailure(ctx.procedure, action="resolve", detail="no lazygit release tag")

    asset = LAZYGIT_ASSET.format(version=version)
    url = f"https://github.com/{LAZYGIT_REPO}/releases/latest/download/{asset}"
    with tempfile.TemporaryDirectory(prefix="devkit-lazygit-") as tmp:
        tarball = Path(tmp) / "lazygit.tar.gz"
        ctx.run(["curl", "-fLo", str(tarball), url])
        ctx.run(["tar", "xf", str(tarball), "-C", "/usr/local/bin", "lazygit"], sudo=True)


def go_tarball(ctx: ProcedureContext, args: dict[str, str]) -> None:
    releases = ctx.fetch_json(GO_RELEASES_URL)
    latest = releases[0] if isinstance(releases, list) and releases else None
    version = latest.get("version") if isinstance(latest, dict) else None
    if not isinstance(version, str) or not version.startswith("go"):
        raise InstallFailure(ctx.procedure, action="resolve", detail="unexpected Go release list")

    with tempfile.TemporaryDirectory(prefix="devkit-go-") as tmp:
        tarball = Path(tmp) / f"{version}.tar.gz"
        ctx.run(["curl", "-fLo", str(tarball), GO_DOWNLOAD_URL.format(version=version)])
        ctx.run(["rm", "-rf", GO_ROOT], sudo=True)
        ctx.run(["tar", "-C", str(Path(GO_ROOT).parent), "-xzf", str(tarball)], sudo=True)


# ── Source builds ───────────────────────────────────────────────


def ghostty_source(ctx: ProcedureContext, args: dict[str, str]) -> None:
    """Build Ghostty with Zig (no apt package exists)."""
    ctx.package_manager.install_packages(list(GHOSTTY_APT_BUILD_DEPS))

    if not ctx.prober.is_present("zig"):
        ctx.progress("info", f"Installing Zig {ZIG_VERSION}...")
        arch = ctx.platform.machine
        url = ZIG_DOWNLOAD_URL.format(version=ZIG_VERSION, arch=arch)
        ctx.script(f"curl -fsSL {url} | sudo tar xJ -C /opt/")
        ctx.run(
            ["ln", "-sf", f"/opt/zig-linux-{arch}-{ZIG_VERSION}/zig", "/usr/local/bin/zig"],
            sudo=True,
        )

    with tempfile.TemporaryDirectory(prefix="devkit-ghostty-") as tmp:
        checkout = Path(tmp) / "ghostty"
        ctx.run(["git", "clone", "--depth", "1", GHOSTTY_REPO, str(checkout)])
        ctx.run(
            ["zig", "build", "-Doptimize=ReleaseFast", "-p", "/usr/local"],
            cwd=checkout,
        )


# ── macOS ───────────────────────────────────────────────────────


def xcode_clt(ctx: ProcedureContext, args: dict[str, str]) -> None:
    # Exits non-zero when an install is already pending; the re-probe decides
    ctx.run(["xcode-select", "--install"], check=False)
    ctx.pause("Complete the Xcode Command Line Tools installation, then press Enter")


PROCEDURES: dict[str, Procedure] = {
    "homebrew": homebrew,
    "starship_script": starship_script,
    "ghostty_source": ghostty_source,
    "neovim_ppa": neovim_ppa,
    "gh_apt_repo": gh_apt_repo,
    "lazygit_release": lazygit_release,
    "nvm_script": nvm_script,
    "rustup_script": rustup_script,
    "go_tarball": go_tarball,
    "dotnet_microsoft_repo": dotnet_microsoft_repo,
    "docker_apt": docker_apt,
    "docker_pacman": docker_pacman,
    "xcode_clt": xcode_clt,
    "npm_global": npm_global,
}
