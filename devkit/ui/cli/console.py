"""
Console rendering for a bootstrap run.

Thin: turns progress events and the final ``RunReport`` into styled
terminal output.  No provisioning logic lives here.
"""

from __future__ import annotations

from typing import Callable

import click

from devkit.core.models.step import RunReport

_STYLES: dict[str, tuple[str, str]] = {
    "info": ("ℹ️ ", "blue"),
    "success": ("✅", "green"),
    "warn": ("⚠️ ", "yellow"),
    "error": ("❌", "red"),
}


def progress_printer(quiet: bool = False) -> Callable[[str, str], None]:
    """Build an ``on_progress`` callback.  ``quiet`` drops info lines."""

    def on_progress(kind: str, message: str) -> None:
        if kind == "section":
            click.secho(f"\n📦 {message}", fg="cyan", bold=True)
            return
        if quiet and kind == "info":
            return
        icon, color = _STYLES.get(kind, ("•", "white"))
        click.secho(f"   {icon} {message}", fg=color, err=kind == "error")

    return on_progress


def confirmer(assume_yes: bool) -> Callable[[str, bool], bool]:
    """Yes/no source for stage gates."""

    def confirm(prompt: str, default: bool = True) -> bool:
        if assume_yes:
            return True
        return click.confirm(prompt, default=default)

    return confirm


def pause(message: str) -> None:
    """Block until the operator presses a key (no-op without a TTY)."""
    click.pause(info=f"   {message}...")


def render_banner(version: str) -> None:
    click.secho("\n🧰 devkit — development environment bootstrap", fg="cyan", bold=True)
    click.echo(f"   version {version}")


def render_report(report: RunReport) -> None:
    """Print the final summary."""
    click.secho("\n📋 Installation Summary", fg="cyan", bold=True)
    click.echo(f"   {report.platform.describe()}")
    click.echo()

    for tool in report.presence:
        if tool.present:
            click.secho(f"   ✓ {tool.name:<10}", fg="green", nl=False)
            click.echo(f" {tool.path}")
        else:
            click.secho(f"   ✗ {tool.name:<10} not found", fg="red")

    failed = report.failed_steps
    if failed:
        click.echo()
        click.secho(f"   Failed steps: {len(failed)}", fg="red", bold=True)
        for step in failed:
            click.echo(f"     • {step.tool}: {step.error}")

    unlinked = report.failed_placements
    if unlinked:
        click.echo()
        click.secho(f"   Failed links: {len(unlinked)}", fg="red", bold=True)
        for placement in unlinked:
            click.echo(f"     • {placement.dest}: {placement.error}")

    click.echo()
    click.secho("   Dotfiles:", fg="white", bold=True, nl=False)
    click.echo(f" {report.dotfiles_dir}")
    if report.backup_dir:
        click.secho("   Backups:", fg="white", bold=True, nl=False)
        click.echo(f"  {report.backup_dir}")

    if report.next_steps:
        click.echo()
        click.secho("   Next steps:", fg="white", bold=True)
        for i, step in enumerate(report.next_steps, 1):
            click.echo(f"     {i}. {step}")
    click.echo()
