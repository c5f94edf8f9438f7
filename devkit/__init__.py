"""
devkit — development-environment bootstrap.

Detects the host platform, installs the developer tool catalog through
the native package manager, and symlinks tracked dotfiles into place.
"""

__version__ = "0.1.0"
