"""Adapters — bindings to package managers and the shell.

Public re-exports for convenient access.
"""

from devkit.adapters.base import PackageManager
from devkit.adapters.registry import create_fallback_adapter, create_package_manager
from devkit.adapters.shell.command import CommandRunner

__all__ = [
    "CommandRunner",
    "PackageManager",
    "create_fallback_adapter",
    "create_package_manager",
]
