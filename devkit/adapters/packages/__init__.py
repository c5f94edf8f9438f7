"""Native package manager adapters."""

from devkit.adapters.packages.apt import AptAdapter
from devkit.adapters.packages.aur import AurAdapter
from devkit.adapters.packages.brew import BrewAdapter
from devkit.adapters.packages.pacman import PacmanAdapter

__all__ = ["AptAdapter", "AurAdapter", "BrewAdapter", "PacmanAdapter"]
