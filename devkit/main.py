"""
devkit — CLI entrypoint.

Usage:
    devkit              # interactive
    devkit --yes        # accept every stage
    python -m devkit.main --help
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from devkit import __version__
from devkit.core.config.loader import ConfigError, load_settings
from devkit.core.errors import PreconditionFailure
from devkit.core.observability.logging_config import resolve_level, setup_logging
from devkit.core.services.provision.detection import detect_platform
from devkit.core.services.provision.orchestration import Orchestrator
from devkit.ui.cli.console import confirmer, pause, progress_printer, render_banner, render_report

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="devkit")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Answer yes to every stage.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Dotfiles repository root (default: this checkout).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devkit.yml (default: <repo>/devkit.yml).",
)
def cli(
    assume_yes: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
    repo_path: str | None,
    config_path: str | None,
) -> None:
    """Bootstrap a development environment: tools, dotfiles, shell."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("DEVKIT_LOG_LEVEL"),
        ),
        log_file=os.environ.get("DEVKIT_LOG_FILE"),
        log_file_level=os.environ.get("DEVKIT_LOG_FILE_LEVEL"),
    )

    try:
        settings = load_settings(
            Path(config_path) if config_path else None,
            dotfiles_dir=Path(repo_path) if repo_path else None,
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(2)

    if not quiet:
        render_banner(__version__)

    try:
        platform = detect_platform()
        orchestrator = Orchestrator(
            platform,
            settings,
            confirm=confirmer(assume_yes),
            pause=pause,
            on_progress=progress_printer(quiet),
        )
        report = orchestrator.run()
    except PreconditionFailure as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    except (KeyboardInterrupt, click.Abort):
        click.secho("\n⚠️  Interrupted", fg="yellow", err=True)
        sys.exit(130)

    render_report(report)
    logger.info("Run finished with %d failed step(s)", len(report.failed_steps))


if __name__ == "__main__":
    cli()
