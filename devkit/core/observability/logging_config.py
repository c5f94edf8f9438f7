"""
Logging configuration — central setup for the devkit entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  DEVKIT_LOG_LEVEL env var  >  WARNING (default)

Optional file output via DEVKIT_LOG_FILE / DEVKIT_LOG_FILE_LEVEL env vars.
Operator-facing progress is printed by the CLI with click, not logged.

Every record is stamped with the stage that was running when it was
emitted (``[fonts]``, ``[dotfiles]``, or ``[-]`` outside any stage), so a
log file from an unattended ``--yes`` run reads stage by stage.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# ── Format strings ──────────────────────────────────────────────

# WARNING level: message only
_FMT_MINIMAL = "%(message)s"

# INFO level: stage and short component name
_FMT_VERBOSE = "%(asctime)s [%(stage)s] %(component)s: %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level: adds level and line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s [%(stage)s] %(component)s:%(lineno)d %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s [%(stage)s] %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Stripped from logger names on the console
_NAME_PREFIXES = ("devkit.core.services.provision.", "devkit.")

_NO_STAGE = "-"
_current_stage: ContextVar[str] = ContextVar("devkit_stage", default=_NO_STAGE)


class StageFilter(logging.Filter):
    """Add ``stage`` and ``component`` attributes to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.stage = _current_stage.get()
        record.component = short_name(record.name)
        return True


def short_name(name: str) -> str:
    """``devkit.core.services.provision.execution.fonts`` -> ``execution.fonts``."""
    for prefix in _NAME_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


@contextmanager
def log_stage(stage_id: str) -> Iterator[None]:
    """Tag every record logged inside the block with ``stage_id``."""
    token = _current_stage.set(stage_id)
    try:
        yield
    finally:
        _current_stage.reset(token)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    numeric_level = _parse_level(level)
    stage_filter = StageFilter()

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.addFilter(stage_filter)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.addFilter(stage_filter)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Apply the CLI-flag > env var > WARNING precedence."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
