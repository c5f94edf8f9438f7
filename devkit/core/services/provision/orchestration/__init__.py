"""
L3 Orchestration — ``ensure(tool)`` and the full gated run.
"""

from devkit.core.services.provision.orchestration.orchestrator import (  # noqa: F401
    ConfirmFn,
    Orchestrator,
    always_yes,
)
from devkit.core.services.provision.orchestration.provisioner import Provisioner  # noqa: F401
from devkit.core.services.provision.orchestration.stages import STAGE_ORDER, Stage  # noqa: F401
