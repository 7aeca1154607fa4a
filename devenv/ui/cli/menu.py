"""
Interactive menu — rendering, input parsing, and the menu loop.

Thin wrapper over ``devenv.core.services.installer``: every decision
lives in the core, this module only talks to the terminal.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

import click

from devenv.adapters.base import Shell
from devenv.core.models.package import Package
from devenv.core.models.settings import Settings
from devenv.core.services.installer.execution.presence import is_installed
from devenv.core.services.installer.orchestration.orchestrator import (
    ProgressCallback,
    RunOutcome,
    install_packages,
)

_QUIT = ("q", "quit", "exit")
_DEFAULTS = ("a", "all")
_SINGLE_RE = re.compile(r"^\d+$")
_MULTI_RE = re.compile(r"^[\d,\s]+$")


@dataclass(frozen=True)
class MenuChoice:
    """Parsed menu input."""

    action: Literal["quit", "defaults", "install", "invalid"]
    packages: list[str] = field(default_factory=list)
    message: str = ""


def parse_choice(raw: str, package_ids: Sequence[str]) -> MenuChoice:
    """Turn one line of menu input into a MenuChoice.

    Accepts (case-insensitive, surrounding whitespace ignored):
    ``q``/``quit``/``exit``, ``a``/``all``, a menu number, or several
    numbers separated by commas and/or spaces. Out-of-range numbers
    in a list are ignored.
    """
    choice = raw.strip().lower()

    if choice in _QUIT:
        return MenuChoice("quit")
    if choice in _DEFAULTS:
        return MenuChoice("defaults")

    if _SINGLE_RE.match(choice):
        index = int(choice) - 1
        if 0 <= index < len(package_ids):
            return MenuChoice("install", [package_ids[index]])
        return MenuChoice("invalid", message="Invalid selection. Please try again.")

    if _MULTI_RE.match(choice):
        selected: list[str] = []
        for token in re.split(r"[,\s]+", choice):
            if not token:
                continue
            index = int(token) - 1
            if 0 <= index < len(package_ids):
                selected.append(package_ids[index])
        if selected:
            return MenuChoice("install", selected)
        return MenuChoice("invalid", message="Invalid selections. Please try again.")

    return MenuChoice("invalid", message="Invalid option. Please try again.")


# ── Rendering ───────────────────────────────────────────────────


def display_welcome() -> None:
    click.echo()
    click.secho("🚀 DevEnv Installer", fg="cyan", bold=True)
    click.echo("==================")
    click.echo()
    click.echo("Welcome! This tool helps you install development packages quickly and easily.")
    click.echo()


def display_goodbye() -> None:
    click.echo()
    click.secho("👋 Thank you for using DevEnv Installer!", fg="cyan")
    click.echo("Happy coding! 🚀")


def display_menu(
    catalog: Mapping[str, Package],
    shell: Shell,
    defaults: Sequence[str],
) -> None:
    """Numbered package list with a presence marker per package."""
    click.echo()
    click.secho("📋 Available Packages:", bold=True)
    click.echo("=" * 50)

    for index, package in enumerate(catalog.values(), start=1):
        status = "✅" if is_installed(package, shell) else "⬜"
        click.echo(f"{index}. {status} {package.name}")

    default_names = ", ".join(catalog[pid].name for pid in defaults if pid in catalog)
    click.echo()
    click.secho("🎯 Quick Options:", bold=True)
    click.echo(f"a. Install all default packages ({default_names})")
    click.echo("q. Quit")
    click.echo()
    click.echo("💡 You can select multiple packages (e.g., '1,3,5' or '1 3 5')")


def display_summary(outcome: RunOutcome, catalog: Mapping[str, Package]) -> None:
    """End-of-run summary: what was installed, what failed."""
    click.echo()
    click.echo("=" * 50)
    click.secho("📊 Installation Summary", bold=True)
    click.echo("=" * 50)

    if outcome.installed:
        click.secho("✅ Successfully installed:", fg="green")
        for pid in outcome.installed:
            click.echo(f"    • {catalog[pid].name}")

    if outcome.failed:
        click.echo()
        click.secho("❌ Failed to install:", fg="red")
        for pid in outcome.failed:
            result = outcome.results.get(pid)
            detail = f" — {result.error}" if result and result.error else ""
            click.echo(f"    • {catalog[pid].name}{detail}")
        click.echo()
        click.echo("💡 Try running the failed installations manually or check the error messages above.")

    if outcome.resolution and outcome.resolution.skipped:
        click.echo()
        click.secho(
            "⚠️  Not installed because of unresolvable dependencies: "
            + ", ".join(outcome.resolution.skipped),
            fg="yellow",
        )

    click.echo()
    click.secho("🎉 Installation process complete!", fg="cyan")


def make_progress_printer(verbose_errors: bool = True) -> ProgressCallback:
    """Progress callback echoing each step of a run."""

    def _print(event: str, package: Package | None, detail: str) -> None:
        if event == "resolved":
            click.echo(f"📦 Will install: {detail or 'nothing'}")
            click.echo("⏳ This may take a few minutes...")
        elif package is None:
            return
        elif event == "start":
            click.echo()
            click.secho(f"📦 Installing {package.name}...", bold=True)
        elif event == "skip":
            click.secho(f"✅ {package.name} is already installed. Skipping.", fg="green")
        elif event == "installed":
            click.secho(f"✅ {package.name} installed successfully!", fg="green")
        elif event == "failed":
            message = f"❌ Failed to install {package.name}"
            if verbose_errors and detail:
                message += f": {detail}"
            click.secho(message, fg="red")

    return _print


# ── Loop ────────────────────────────────────────────────────────


def run_install(
    requested: Sequence[str],
    *,
    shell: Shell,
    catalog: Mapping[str, Package],
    settings: Settings,
) -> RunOutcome:
    """One interactive installation run, with progress and summary."""
    click.echo()
    click.secho("🔧 Starting installation process...", bold=True)
    outcome = install_packages(
        requested,
        shell=shell,
        catalog=catalog,
        settings=settings,
        on_progress=make_progress_printer(),
    )
    display_summary(outcome, catalog)
    return outcome


def run_menu(
    *,
    shell: Shell,
    catalog: Mapping[str, Package],
    settings: Settings,
    defaults: Sequence[str],
    prompt: Callable[[str], str] | None = None,
) -> None:
    """Show the menu until the user quits (or input ends)."""
    ask = prompt or (lambda text: click.prompt(text, default="", show_default=False))
    package_ids = list(catalog.keys())

    while True:
        display_menu(catalog, shell, defaults)
        try:
            raw = ask("\nEnter your choice")
        except (click.Abort, EOFError):
            display_goodbye()
            return

        choice = parse_choice(raw, package_ids)
        if choice.action == "quit":
            display_goodbye()
            return
        if choice.action == "defaults":
            run_install(defaults, shell=shell, catalog=catalog, settings=settings)
        elif choice.action == "install":
            run_install(choice.packages, shell=shell, catalog=catalog, settings=settings)
        else:
            click.secho(f"❌ {choice.message}", fg="red")

        try:
            ask("\nPress Enter to continue...")
        except (click.Abort, EOFError):
            display_goodbye()
            return
