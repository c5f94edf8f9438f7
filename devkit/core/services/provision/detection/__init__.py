"""
L1 Detection — ``__init__.py`` re-exports all detection functions.

These READ host state but never WRITE: os-release parsing, uname,
PATH lookups.
"""

from devkit.core.services.provision.detection.platform import (  # noqa: F401
    classify_distro,
    detect_platform,
    parse_os_release,
    read_os_release,
)
from devkit.core.services.provision.detection.probe import CapabilityProber  # noqa: F401
