"""
DevEnv Installer — CLI entrypoint.

Usage:
    devenv                    # interactive menu
    devenv install rails git
    devenv plan rails
    devenv list
    devenv check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from devenv import __version__
from devenv.adapters.base import Shell
from devenv.core.models.package import Catalog
from devenv.core.models.settings import Settings
from devenv.core.observability.logging_config import resolve_level, setup_from_env


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="devenv")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devenv.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """DevEnv Installer — set up your local development toolchain."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


# ── Helpers ─────────────────────────────────────────────────────


def _load(ctx: click.Context) -> tuple[Settings, Catalog]:
    """Load settings + catalog, exiting with a message on config errors."""
    from devenv.core.config.loader import ConfigError, build_catalog, load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    return settings, build_catalog(settings)


def _make_shell(settings: Settings, *, mock: bool = False, echo: bool = True) -> Shell:
    if mock:
        from devenv.adapters.mock import MockShell

        return MockShell()

    from devenv.adapters.shell.command import ShellRunner

    return ShellRunner(timeout=settings.command_timeout, echo=echo)


def _bootstrap(shell: Shell, settings: Settings, assume_yes: bool) -> None:
    """Check for Homebrew; a failed install is fatal (exit 1)."""
    from devenv.core.services.installer.orchestration.bootstrap import (
        BootstrapError,
        ensure_package_manager,
    )

    click.echo("🔍 Checking prerequisites...")

    def _confirm() -> bool:
        click.secho("⚠️  Homebrew not found on your system.", fg="yellow")
        if assume_yes:
            return True
        return click.confirm("Do you want to install Homebrew now?", default=False)

    try:
        installed = ensure_package_manager(shell, settings, _confirm)
    except BootstrapError as e:
        click.secho(f"❌ {e}", fg="red")
        click.echo("   Please install manually by running the command below in your terminal:")
        click.echo(f"   {e.command}")
        sys.exit(1)

    if not installed:
        click.echo(
            "Skipping Homebrew installation. Please be aware that installations "
            "of Homebrew-dependent packages may fail."
        )
    click.echo("✅ Prerequisites check complete.")


# ── Commands ────────────────────────────────────────────────────


@cli.command()
@click.option("--mock", is_flag=True, help="Use mock shell (no real execution).")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Install Homebrew without asking.")
@click.pass_context
def menu(ctx: click.Context, mock: bool = False, assume_yes: bool = False) -> None:
    """Interactive package menu (the default command)."""
    from devenv.core.config.loader import default_packages
    from devenv.ui.cli.menu import display_welcome, run_menu

    settings, catalog = _load(ctx)
    shell = _make_shell(settings, mock=mock)

    display_welcome()
    _bootstrap(shell, settings, assume_yes)
    run_menu(
        shell=shell,
        catalog=catalog,
        settings=settings,
        defaults=default_packages(settings),
    )


@cli.command()
@click.argument("packages", nargs=-1)
@click.option("--defaults", "use_defaults", is_flag=True, help="Install the default package set.")
@click.option("--dry-run", is_flag=True, help="Resolve the install order but don't install.")
@click.option("--mock", is_flag=True, help="Use mock shell (no real execution).")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Install Homebrew without asking.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    packages: tuple[str, ...],
    use_defaults: bool,
    dry_run: bool,
    mock: bool,
    assume_yes: bool,
    as_json: bool,
) -> None:
    """Install packages (and their prerequisites) without the menu.

    Examples:

        devenv install rails

        devenv install --defaults node

        devenv install jekyll --dry-run
    """
    from devenv.core.config.loader import default_packages
    from devenv.core.services.installer.orchestration.orchestrator import install_packages
    from devenv.ui.cli.menu import display_summary, make_progress_printer

    settings, catalog = _load(ctx)
    requested = list(packages)
    if use_defaults:
        requested = default_packages(settings) + requested

    if not requested:
        click.secho("❌ Nothing to install: name packages or pass --defaults", fg="red")
        sys.exit(1)

    shell = _make_shell(settings, mock=mock, echo=not as_json)
    if not dry_run and not as_json:
        _bootstrap(shell, settings, assume_yes)

    outcome = install_packages(
        requested,
        shell=shell,
        catalog=catalog,
        settings=settings,
        on_progress=None if as_json else make_progress_printer(),
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        return

    resolution = outcome.resolution
    if resolution and resolution.unknown:
        click.secho(f"⚠️  Unknown packages ignored: {', '.join(resolution.unknown)}", fg="yellow")

    if dry_run:
        click.secho("[dry-run] nothing was installed", fg="yellow")
        return

    display_summary(outcome, catalog)


@cli.command()
@click.argument("packages", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(ctx: click.Context, packages: tuple[str, ...], as_json: bool) -> None:
    """Show the order packages would be installed in."""
    from devenv.core.services.installer.domain.resolver import resolve

    _, catalog = _load(ctx)
    result = resolve(packages, catalog)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"\n🧭 Install order ({len(result)}):", fg="cyan", bold=True)
    for i, pid in enumerate(result.order, start=1):
        deps = catalog[pid].dependencies
        after = f"  (after {', '.join(deps)})" if deps else ""
        click.echo(f"   {i}. {catalog[pid].name} [{pid}]{after}")

    if result.unknown:
        click.echo()
        click.secho(f"   ⚠️  Unknown packages ignored: {', '.join(result.unknown)}", fg="yellow")

    for cycle in result.cycles:
        click.secho(f"   ⚠️  Dependency cycle: {' → '.join(cycle)}", fg="yellow")
    if result.skipped:
        click.secho(f"   ⚠️  Skipped: {', '.join(result.skipped)}", fg="yellow")

    click.echo()


@cli.command("list")
@click.option("--mock", is_flag=True, help="Use mock shell (no real execution).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_packages(ctx: click.Context, mock: bool, as_json: bool) -> None:
    """List known packages and whether they are installed."""
    from devenv.core.config.loader import default_packages
    from devenv.core.services.installer.execution.presence import is_installed

    settings, catalog = _load(ctx)
    shell = _make_shell(settings, mock=mock, echo=False)
    defaults = set(default_packages(settings))

    rows = [
        {
            "number": i,
            "id": pid,
            "name": package.name,
            "method": package.method.value,
            "dependencies": list(package.dependencies),
            "installed": is_installed(package, shell),
            "default": pid in defaults,
        }
        for i, (pid, package) in enumerate(catalog.items(), start=1)
    ]

    if as_json:
        click.echo(json.dumps({"packages": rows}, indent=2))
        return

    click.secho("\n📋 Packages:", fg="cyan", bold=True)
    for row in rows:
        marker = "✅" if row["installed"] else "⬜"
        star = " *" if row["default"] else ""
        click.echo(f"   {row['number']:>2}. {marker} {row['name']} [{row['id']}]{star}")
    click.echo()
    click.echo("   * installed by the 'all' option")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate devenv.yml and the package catalog."""
    from devenv.core.config.loader import default_packages
    from devenv.core.services.installer.domain.validation import unknown_ids, validate_catalog

    settings, catalog = _load(ctx)
    errors = validate_catalog(catalog)
    errors.extend(
        f"Default package '{pid}' is not defined"
        for pid in unknown_ids(default_packages(settings), catalog)
    )
    valid = not errors

    if as_json:
        click.echo(json.dumps({"valid": valid, "packages": len(catalog), "errors": errors}, indent=2))
        sys.exit(0 if valid else 1)

    if valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Packages: {len(catalog)}")
        click.echo(f"   Defaults: {', '.join(default_packages(settings))}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in errors:
            click.echo(f"   • {err}")
        click.echo()
        sys.exit(1)

    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
