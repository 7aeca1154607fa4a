"""
L4 Execution — Method-specific install handlers.

One handler per InstallMethod, dispatched through ``INSTALL_HANDLERS``.
Every handler returns a CommandResult; a missing prerequisite tool is
reported as a failure without running anything.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from devenv.adapters.base import Shell
from devenv.core.models.command import CommandResult
from devenv.core.models.package import InstallMethod, Package
from devenv.core.models.settings import Settings
from devenv.core.services.installer.domain.shellenv import prepend_path
from devenv.core.services.installer.domain.versions import pick_latest_version
from devenv.core.services.installer.execution.presence import command_exists

logger = logging.getLogger(__name__)

InstallHandler = Callable[[Package, Shell, Settings], CommandResult]

_TOOL_LABELS = {
    "brew": "Homebrew",
    "rbenv": "rbenv",
    "ruby": "Ruby",
    "curl": "Curl",
}

# Appended to the missing-tool message.
_TOOL_HINTS = {
    "ruby": "Please install Ruby first (it is listed in the menu).",
}


def _missing_tool(package: Package, tool: str) -> CommandResult:
    label = _TOOL_LABELS.get(tool, tool)
    error = f"{label} is required for {package.name} but not installed or found in PATH."
    if tool in _TOOL_HINTS:
        error = f"{error} {_TOOL_HINTS[tool]}"
    logger.warning(error)
    return CommandResult.failure(package.command or package.id, error)


def _run_with_tool(package: Package, shell: Shell) -> CommandResult:
    """Run the descriptor command once the method's tool is on PATH."""
    tool = package.method.required_tool
    if tool and not command_exists(tool, shell):
        return _missing_tool(package, tool)
    if not package.command:
        return CommandResult.failure(package.id, f"No install command for {package.name}")
    return shell.run(package.command, requires_sudo=package.requires_sudo)


# ── One handler per method ──────────────────────────────────────


def install_with_package_manager(package: Package, shell: Shell, settings: Settings) -> CommandResult:
    """``brew install ...``"""
    return _run_with_tool(package, shell)


def install_with_gem(package: Package, shell: Shell, settings: Settings) -> CommandResult:
    """``gem install ...`` — needs a Ruby on PATH."""
    return _run_with_tool(package, shell)


def install_with_download_script(package: Package, shell: Shell, settings: Settings) -> CommandResult:
    """``curl ... | bash`` installers."""
    return _run_with_tool(package, shell)


def install_direct(package: Package, shell: Shell, settings: Settings) -> CommandResult:
    """Run the command as-is, with sudo when the descriptor asks for it."""
    return _run_with_tool(package, shell)


def install_ruby_with_rbenv(package: Package, shell: Shell, settings: Settings) -> CommandResult:
    """Install the latest stable Ruby through rbenv and make it global.

    1. Put ``$(rbenv root)/shims`` on PATH if that directory exists
    2. Pick the latest ``X.Y.Z`` from ``rbenv install --list``
       (falls back to ``settings.fallback_ruby_version``)
    3. ``rbenv install`` → ``rbenv global`` → ``rbenv rehash``,
       stopping at the first failure
    """
    if command_exists("rbenv", shell):
        root = shell.capture("rbenv root")
        rbenv_root = root.stdout.strip() if root.ok else ""
        if rbenv_root and Path(rbenv_root).is_dir():
            shell.env = prepend_path(shell.env, f"{rbenv_root}/shims")
            logger.info("Added %s/shims to PATH", rbenv_root)

    if not command_exists("rbenv", shell):
        return _missing_tool(package, "rbenv")

    listing = shell.capture("rbenv install --list")
    version, found = pick_latest_version(
        listing.stdout if listing.ok else "",
        settings.fallback_ruby_version,
    )
    if found:
        logger.info("Latest stable Ruby: %s", version)
    else:
        logger.warning(
            "Could not determine latest Ruby version; falling back to %s", version,
        )

    result = CommandResult.failure(package.id, "not started")
    for command in (
        f"rbenv install {version}",
        f"rbenv global {version}",
        "rbenv rehash",
    ):
        result = shell.run(command)
        if not result.ok:
            return result

    logger.info("Ruby %s installed and set globally via rbenv", version)
    return result


INSTALL_HANDLERS: dict[InstallMethod, InstallHandler] = {
    InstallMethod.PACKAGE_MANAGER: install_with_package_manager,
    InstallMethod.VERSION_MANAGER_CUSTOM: install_ruby_with_rbenv,
    InstallMethod.LANGUAGE_PACKAGE_MANAGER: install_with_gem,
    InstallMethod.DOWNLOAD_SCRIPT: install_with_download_script,
    InstallMethod.DIRECT: install_direct,
}


def run_install_handler(package: Package, shell: Shell, settings: Settings) -> CommandResult:
    """Dispatch *package* to the handler for its method."""
    return INSTALL_HANDLERS[package.method](package, shell, settings)


def run_post_install(package: Package, shell: Shell) -> list[CommandResult]:
    """Run follow-up commands best-effort; failures are only logged."""
    results: list[CommandResult] = []
    for command in package.post_install:
        try:
            result = shell.run(command)
        except Exception as e:
            logger.warning("Post-install command for '%s' errored: %s", package.id, e)
            continue
        if not result.ok:
            logger.warning(
                "Post-install command for '%s' failed: %s", package.id, command,
            )
        results.append(result)
    return results
