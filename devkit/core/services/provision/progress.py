"""
Progress reporting — how the engine tells the operator what it is doing.

Services call ``on_progress(kind, message)``; the CLI renders it with
colour, tests collect it, and the default just logs.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal

logger = logging.getLogger(__name__)

ProgressKind = Literal["section", "info", "success", "warn", "error"]
ProgressFn = Callable[[str, str], None]

_LEVELS = {
    "section": logging.INFO,
    "info": logging.INFO,
    "success": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def log_progress(kind: str, message: str) -> None:
    """Default progress sink — route to logging."""
    logger.log(_LEVELS.get(kind, logging.INFO), "%s", message)
