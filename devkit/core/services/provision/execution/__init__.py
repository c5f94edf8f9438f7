"""
L2 Execution — Side effects: backups, placement, procedures, fonts, login shell.
"""

from devkit.core.services.provision.execution.backup import BackupDirectory  # noqa: F401
from devkit.core.services.provision.execution.fonts import install_fonts  # noqa: F401
from devkit.core.services.provision.execution.login_shell import (  # noqa: F401
    is_default_shell,
    set_login_shell,
)
from devkit.core.services.provision.execution.placement import (  # noqa: F401
    PlacementEngine,
    expand_dest,
)
from devkit.core.services.provision.execution.procedures import (  # noqa: F401
    PROCEDURES,
    ProcedureContext,
)
