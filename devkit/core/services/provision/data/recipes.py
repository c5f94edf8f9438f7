"""
L0 Data — Tool catalog and stage categories.

Every tool the bootstrap can provision, keyed by its canonical command
name.  Pure data, no logic.

Strategy keys are package-manager ids (``apt``, ``pacman``, ``brew``)
or ``_default`` for "any manager not listed".  A strategy is either a
package list for the native adapter or the name of a custom procedure
in ``execution/procedures.py``.
"""

from __future__ import annotations

from devkit.core.models.tool import Category, InstallStrategy, Tool


def _pkgs(*names: str, cask: bool = False) -> InstallStrategy:
    return InstallStrategy(packages=list(names), cask=cask)


def _proc(name: str, **args: str) -> InstallStrategy:
    return InstallStrategy(procedure=name, args=args)


_CATALOG: list[Tool] = [

    # ── Bootstrap (macOS) ───────────────────────────────────────

    Tool(
        name="brew",
        label="Homebrew",
        category="bootstrap",
        platforms=["macos"],
        strategies={"_default": _proc("homebrew")},
    ),

    # ── Shell & prompt ──────────────────────────────────────────

    Tool(
        name="zsh",
        category="shell",
        strategies={"_default": _pkgs("zsh")},
    ),
    Tool(
        name="starship",
        category="shell",
        strategies={
            "brew": _pkgs("starship"),
            "_default": _proc("starship_script"),
        },
        requires=["curl"],
    ),

    # ── Terminal & multiplexer ──────────────────────────────────

    Tool(
        name="ghostty",
        label="Ghostty",
        category="terminal",
        # apt has no package: built from source with Zig
        strategies={
            "brew": _pkgs("ghostty", cask=True),
            "apt": _proc("ghostty_source"),
            "pacman": _pkgs("ghostty"),
        },
    ),
    Tool(
        name="tmux",
        category="terminal",
        strategies={"_default": _pkgs("tmux")},
    ),

    # ── Editor ──────────────────────────────────────────────────

    Tool(
        name="nvim",
        label="Neovim",
        category="editor",
        # Debian/Ubuntu neovim is too old; use the PPA
        strategies={
            "apt": _proc("neovim_ppa"),
            "_default": _pkgs("neovim"),
        },
    ),

    # ── Git tools ───────────────────────────────────────────────

    Tool(
        name="git",
        category="git",
        strategies={"_default": _pkgs("git")},
    ),
    Tool(
        name="gh",
        label="GitHub CLI",
        category="git",
        strategies={
            "apt": _proc("gh_apt_repo"),
            "pacman": _pkgs("github-cli"),
            "brew": _pkgs("gh"),
        },
    ),
    Tool(
        name="lazygit",
        category="git",
        strategies={
            "apt": _proc("lazygit_release"),
            "_default": _pkgs("lazygit"),
        },
    ),

    # ── Programming languages ───────────────────────────────────

    Tool(
        name="nvm",
        label="NVM + Node.js LTS",
        category="languages",
        # nvm is a shell function, not an executable
        check_path="~/.nvm",
        strategies={"_default": _proc("nvm_script")},
        requires=["curl"],
    ),
    Tool(
        name="python3",
        label="Python 3",
        category="languages",
        strategies={
            "apt": _pkgs("python3", "python3-pip", "python3-venv"),
            "pacman": _pkgs("python", "python-pip"),
            "brew": _pkgs("python3"),
        },
    ),
    Tool(
        name="pip",
        label="pip (python3 -m pip)",
        category="languages",
        # brew's python3 ships pip
        platforms=["linux"],
        check_command=["python3", "-m", "pip", "--version"],
        strategies={
            "apt": _pkgs("python3-pip"),
            "pacman": _pkgs("python-pip"),
        },
    ),
    Tool(
        name="rustc",
        label="Rust (rustup)",
        category="languages",
        strategies={"_default": _proc("rustup_script")},
        requires=["curl"],
        post_path=["~/.cargo/bin"],
    ),
    Tool(
        name="go",
        label="Go",
        category="languages",
        strategies={
            "apt": _proc("go_tarball"),
            "_default": _pkgs("go"),
        },
        post_path=["/usr/local/go/bin"],
    ),
    Tool(
        name="dotnet",
        label=".NET SDK",
        category="languages",
        strategies={
            "apt": _proc("dotnet_microsoft_repo"),
            "pacman": _pkgs("dotnet-sdk"),
            "brew": _pkgs("dotnet-sdk", cask=True),
        },
    ),

    # ── Containers ──────────────────────────────────────────────

    Tool(
        name="docker",
        label="Docker",
        category="docker",
        strategies={
            "apt": _proc("docker_apt"),
            "pacman": _proc("docker_pacman"),
            # OrbStack provides the docker CLI on macOS
            "brew": _pkgs("orbstack", cask=True),
        },
    ),

    # ── Build tools ─────────────────────────────────────────────

    Tool(
        name="xcode-clt",
        label="Xcode Command Line Tools",
        category="build",
        platforms=["macos"],
        check_command=["xcode-select", "-p"],
        strategies={"brew": _proc("xcode_clt")},
    ),
    Tool(
        name="make",
        label="Build essentials",
        category="build",
        platforms=["linux"],
        strategies={
            "apt": _pkgs("build-essential"),
            "pacman": _pkgs("base-devel"),
        },
    ),
    Tool(
        name="cmake",
        category="build",
        strategies={"_default": _pkgs("cmake")},
    ),
    Tool(
        name="curl",
        category="build",
        strategies={"_default": _pkgs("curl")},
    ),
    Tool(
        name="wget",
        category="build",
        strategies={"_default": _pkgs("wget")},
    ),
    Tool(
        name="unzip",
        category="build",
        strategies={"_default": _pkgs("unzip")},
    ),

    # ── Window manager (macOS only) ─────────────────────────────

    Tool(
        name="aerospace",
        label="AeroSpace",
        category="aerospace",
        platforms=["macos"],
        strategies={"brew": _pkgs("nikitabobko/tap/aerospace", cask=True)},
    ),

    # ── AI CLI ──────────────────────────────────────────────────

    Tool(
        name="opencode",
        label="OpenCode",
        category="opencode",
        requires=["npm"],
        strategies={"_default": _proc("npm_global", package="opencode")},
    ),
]

TOOLS: dict[str, Tool] = {tool.name: tool for tool in _CATALOG}


# Offered to the operator in this order; fonts and dotfiles are stages
# of their own (see orchestration/stages.py).
CATEGORIES: list[Category] = [
    Category(id="shell", label="Shell & Prompt (zsh, starship)",
             tools=["zsh", "starship"]),
    Category(id="terminal", label="Terminal & Multiplexer (ghostty, tmux)",
             tools=["ghostty", "tmux"]),
    Category(id="editor", label="Editor (neovim)",
             tools=["nvim"]),
    Category(id="git", label="Git Tools (git, gh, lazygit)",
             tools=["git", "gh", "lazygit"]),
    Category(id="languages", label="Programming Languages (node, python, rust, go, dotnet)",
             tools=["nvm", "python3", "pip", "rustc", "go", "dotnet"]),
    Category(id="docker", label="Docker",
             tools=["docker"]),
    Category(id="build", label="Build Tools (make, cmake, gcc)",
             tools=["xcode-clt", "make", "cmake", "curl", "wget", "unzip"]),
    Category(id="aerospace", label="AeroSpace (tiling window manager)",
             tools=["aerospace"], platforms=["macos"]),
    Category(id="opencode", label="OpenCode (AI CLI tool)",
             tools=["opencode"]),
]


def get_tool(name: str) -> Tool:
    """Look up a catalog tool by command name (KeyError if unknown)."""
    return TOOLS[name]


def get_category(category_id: str) -> Category | None:
    for category in CATEGORIES:
        if category.id == category_id:
            return category
    return None
