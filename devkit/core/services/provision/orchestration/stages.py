"""
L3 Orchestration — Stage definitions.

A stage is one yes/no question plus the action run when the operator
says yes.  The ordered list comes from ``STAGE_ORDER``; category stages
get their prompt from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from devkit.core.models.step import StageOutcome

# Operator-facing order.  Category ids come from data/recipes.py.
STAGE_ORDER: tuple[str, ...] = (
    "update",
    "shell",
    "terminal",
    "editor",
    "git",
    "languages",
    "docker",
    "build",
    "fonts",
    "aerospace",
    "opencode",
    "dotfiles",
    "login_shell",
)


@dataclass
class Stage:
    """One step of the run.

    ``gated`` stages ask ``prompt`` first; ungated stages always run
    (the login-shell stage asks its own question only when needed).
    ``platforms`` hides the stage, question included, elsewhere.
    """

    id: str
    label: str
    action: Callable[[StageOutcome], None]
    prompt: str = ""
    gated: bool = True
    default: bool = True
    platforms: list[str] = field(default_factory=list)

    def outcome(self, accepted: bool) -> StageOutcome:
        return StageOutcome(stage=self.id, label=self.label, accepted=accepted)
