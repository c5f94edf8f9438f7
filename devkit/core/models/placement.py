"""
Placement models — tracked dotfiles and what happened to them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PlacementEntry(BaseModel):
    """A declared (source, destination) pair.

    ``source`` is relative to the dotfiles repository root; ``dest`` is
    usually ``~``-relative.  A missing source is skipped, not an error.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    dest: str
    platforms: list[str] = Field(default_factory=list)


class PlacementResult(BaseModel):
    """Outcome of linking one entry."""

    source: str
    dest: str
    status: Literal["linked", "missing_source", "failed"] = "linked"
    backup: str | None = None       # where a pre-existing file was moved
    error: str | None = None

    @property
    def linked(self) -> bool:
        return self.status == "linked"
