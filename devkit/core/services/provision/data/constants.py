"""
L0 Data — Constants shared by detection and the custom procedures.
"""

from __future__ import annotations

# ── Platform detection ──────────────────────────────────────────

OS_RELEASE_PATH = "/etc/os-release"

DEBIAN_DISTRO_IDS = frozenset({
    "ubuntu", "debian", "pop", "linuxmint", "elementary", "zorin",
})
ARCH_DISTRO_IDS = frozenset({
    "arch", "manjaro", "endeavouros", "garuda",
})

# Probed in this order when the distro id is unknown
PACKAGE_MANAGER_PROBE_ORDER: tuple[tuple[str, str], ...] = (
    ("apt", "debian"),
    ("pacman", "arch"),
)

# ── Homebrew ────────────────────────────────────────────────────

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
# Apple Silicon first, then Intel
HOMEBREW_PREFIXES = ("/opt/homebrew", "/usr/local")

# ── Vendor install scripts ──────────────────────────────────────

STARSHIP_INSTALL_URL = "https://starship.rs/install.sh"
RUSTUP_URL = "https://sh.rustup.rs"
NVM_VERSION = "v0.40.3"
NVM_INSTALL_URL = f"https://raw.githubusercontent.com/nvm-sh/nvm/{NVM_VERSION}/install.sh"

# ── Ghostty (built from source on apt systems) ─────────────────

GHOSTTY_REPO = "https://github.com/ghostty-org/ghostty.git"
GHOSTTY_APT_BUILD_DEPS = (
    "libgtk-4-dev", "libadwaita-1-dev", "git",
    "blueprint-compiler", "gettext",
    "libxml2-utils", "desktop-file-utils",
    "appstream", "appstream-util",
)
ZIG_VERSION = "0.14.1"
ZIG_DOWNLOAD_URL = "https://ziglang.org/download/{version}/zig-linux-{arch}-{version}.tar.xz"

# ── Release archives ────────────────────────────────────────────

LAZYGIT_REPO = "jesseduffield/lazygit"
LAZYGIT_ASSET = "lazygit_{version}_Linux_x86_64.tar.gz"
GO_RELEASES_URL = "https://go.dev/dl/?mode=json"
GO_DOWNLOAD_URL = "https://go.dev/dl/{version}.linux-amd64.tar.gz"
GO_ROOT = "/usr/local/go"

# ── Third-party apt repositories ────────────────────────────────

APT_KEYRINGS_DIR = "/etc/apt/keyrings"
GH_KEYRING_URL = "https://cli.github.com/packages/githubcli-archive-keyring.gpg"
GH_APT_SOURCE = (
    "deb [arch={arch} signed-by=/etc/apt/keyrings/githubcli-archive-keyring.gpg] "
    "https://cli.github.com/packages stable main"
)
DOCKER_GPG_URL = "https://download.docker.com/linux/ubuntu/gpg"
DOCKER_APT_SOURCE = (
    "deb [arch={arch} signed-by=/etc/apt/keyrings/docker.gpg] "
    "https://download.docker.com/linux/ubuntu {codename} stable"
)
DOCKER_APT_PACKAGES = (
    "docker-ce", "docker-ce-cli", "containerd.io",
    "docker-buildx-plugin", "docker-compose-plugin",
)
MICROSOFT_PROD_DEB_URL = (
    "https://packages.microsoft.com/config/ubuntu/{release}/packages-microsoft-prod.deb"
)
DOTNET_SDK_PACKAGE = "dotnet-sdk-9.0"

# ── Fonts ───────────────────────────────────────────────────────

LINUX_FONT_DIR = "~/.local/share/fonts"
MACOS_FONT_DIR = "~/Library/Fonts"

# ── Summary ─────────────────────────────────────────────────────

# Re-probed after every run, in this order.
SUMMARY_TOOLS = (
    "zsh", "starship", "ghostty", "tmux", "nvim", "git", "gh", "lazygit",
    "node", "python3", "rustc", "go", "dotnet", "docker", "opencode",
)

ETC_SHELLS = "/etc/shells"
