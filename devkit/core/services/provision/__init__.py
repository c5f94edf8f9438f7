"""
Provisioning service — package re-exports.

Layers, innermost first::

    data → detection → execution → orchestration

``data`` is pure catalog, ``detection`` reads host state, ``execution``
mutates it, ``orchestration`` decides what runs when.
"""

# ── L0: Data ──
from devkit.core.services.provision.data import TOOLS, get_tool  # noqa: F401

# ── L1: Detection ──
from devkit.core.services.provision.detection import (  # noqa: F401
    CapabilityProber,
    detect_platform,
)

# ── L2: Execution ──
from devkit.core.services.provision.execution import (  # noqa: F401
    BackupDirectory,
    PlacementEngine,
)

# ── L3: Orchestration ──
from devkit.core.services.provision.orchestration import (  # noqa: F401
    Orchestrator,
    Provisioner,
    always_yes,
)
