"""
L0 Data — ``__init__.py`` re-exports the static catalogs.

Pure data, no logic: the tool catalog, the stage categories and the
tracked dotfiles.
"""

from devkit.core.services.provision.data.placements import PLACEMENTS  # noqa: F401
from devkit.core.services.provision.data.recipes import (  # noqa: F401
    CATEGORIES,
    TOOLS,
    get_category,
    get_tool,
)
