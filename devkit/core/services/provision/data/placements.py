"""
L0 Data — Tracked dotfiles.

Sources are relative to the dotfiles repository root.  A source that
does not exist is skipped at link time.
"""

from __future__ import annotations

from devkit.core.models.placement import PlacementEntry

PLACEMENTS: list[PlacementEntry] = [
    # Shell
    PlacementEntry(source=".zshrc", dest="~/.zshrc"),
    PlacementEntry(source=".zprofile", dest="~/.zprofile"),
    PlacementEntry(source=".zshenv", dest="~/.zshenv"),
    # Tmux
    PlacementEntry(source="tmux.conf", dest="~/.tmux.conf"),
    # Prompt
    PlacementEntry(source="starship.toml", dest="~/.config/starship.toml"),
    # Terminal
    PlacementEntry(source="ghostty", dest="~/.config/ghostty"),
    # Editor
    PlacementEntry(source="nvim", dest="~/.config/nvim"),
    # Window manager
    PlacementEntry(source="aerospace.toml", dest="~/.aerospace.toml", platforms=["macos"]),
]
