"""
Run records — per-tool step outcomes, stage outcomes, final report.

Created per run, never persisted.  Re-running derives everything again
from the live filesystem and PATH.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from devkit.core.models.placement import PlacementResult
from devkit.core.models.platform import Platform

StepStatus = Literal["already_present", "installed", "failed", "skipped"]


class ProvisioningStep(BaseModel):
    """Outcome of ``ensure(tool)``."""

    tool: str
    status: StepStatus
    method: str = ""                # e.g. "apt", "_default", "aur"
    error: str | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status != "failed"


class StageOutcome(BaseModel):
    """What one gated stage did."""

    stage: str
    label: str = ""
    accepted: bool = False
    steps: list[ProvisioningStep] = Field(default_factory=list)
    placements: list[PlacementResult] = Field(default_factory=list)
    note: str = ""

    @property
    def failed(self) -> list[ProvisioningStep]:
        return [s for s in self.steps if s.status == "failed"]


class ToolPresence(BaseModel):
    """One line of the final summary."""

    name: str
    path: str | None = None

    @property
    def present(self) -> bool:
        return self.path is not None


class RunReport(BaseModel):
    """Everything the summary needs after the run."""

    platform: Platform
    dotfiles_dir: str
    stages: list[StageOutcome] = Field(default_factory=list)
    presence: list[ToolPresence] = Field(default_factory=list)
    backup_dir: str | None = None
    next_steps: list[str] = Field(default_factory=list)

    def stage(self, stage_id: str) -> StageOutcome | None:
        for outcome in self.stages:
            if outcome.stage == stage_id:
                return outcome
        return None

    @property
    def failed_steps(self) -> list[ProvisioningStep]:
        return [s for o in self.stages for s in o.failed]

    @property
    def failed_placements(self) -> list[PlacementResult]:
        return [p for o in self.stages for p in o.placements if p.status == "failed"]
