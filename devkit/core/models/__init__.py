"""
Domain models — Pydantic types for a provisioning run.

All models are re-exported here for convenient access:

    from devkit.core.models import Platform, Tool, ProvisioningStep
"""

from devkit.core.models.command import CommandResult
from devkit.core.models.placement import PlacementEntry, PlacementResult
from devkit.core.models.platform import Platform
from devkit.core.models.step import (
    ProvisioningStep,
    RunReport,
    StageOutcome,
    ToolPresence,
)
from devkit.core.models.tool import Category, InstallStrategy, Tool

__all__ = [
    "Category",
    "CommandResult",
    "InstallStrategy",
    "PlacementEntry",
    "PlacementResult",
    "Platform",
    "ProvisioningStep",
    "RunReport",
    "StageOutcome",
    "Tool",
    "ToolPresence",
]
