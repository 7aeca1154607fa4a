"""
L5 Orchestration — Package manager bootstrap.

Most packages depend (directly or through rbenv) on Homebrew, so it
is provisioned before the menu opens. Failing to install it when the
user asked for it is the one fatal error of the installer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from devenv.adapters.base import Shell
from devenv.core.models.settings import Settings
from devenv.core.services.installer.domain.shellenv import apply_shellenv, ensure_paths
from devenv.core.services.installer.execution.presence import command_exists

logger = logging.getLogger(__name__)


class BootstrapError(Exception):
    """Raised when Homebrew could not be installed. Fatal."""

    def __init__(self, message: str, command: str):
        super().__init__(message)
        self.command = command


def ensure_package_manager(
    shell: Shell,
    settings: Settings,
    confirm: Callable[[], bool],
) -> bool:
    """Make sure ``brew`` is available, installing it if the user agrees.

    Args:
        shell: Command runner; its ``env`` is updated on success.
        settings: Supplies the install command and Homebrew prefixes.
        confirm: Asks the user whether to install Homebrew now.

    Returns:
        True when brew is available afterwards, False when the user
        declined.

    Raises:
        BootstrapError: The install command failed.
    """
    if command_exists("brew", shell):
        logger.debug("Homebrew found")
        return True

    logger.warning("Homebrew not found on your system.")
    if not confirm():
        logger.warning(
            "Skipping Homebrew installation; Homebrew-dependent packages may fail.",
        )
        return False

    command = settings.homebrew_install_command
    result = shell.run(command)
    if not result.ok:
        raise BootstrapError(
            f"Failed to install Homebrew ({result.error or 'unknown error'})",
            command=command,
        )

    logger.info("Homebrew installed")
    shell.env = update_brew_path(shell, settings)
    return True


def update_brew_path(shell: Shell, settings: Settings) -> dict[str, str]:
    """Return the shell's environment updated for a fresh Homebrew.

    Applies ``brew shellenv`` from the first prefix that answers, then
    makes sure every Homebrew ``bin`` directory is on PATH. Problems
    are logged, never raised: the worst case is that a new terminal
    is needed.
    """
    env = dict(shell.env)
    for bin_dir in settings.brew_bin_dirs:
        try:
            result = shell.capture(f"{bin_dir}/brew shellenv 2>/dev/null")
        except Exception as e:
            logger.warning("Could not read brew shellenv from %s: %s", bin_dir, e)
            continue
        if result.ok and result.stdout.strip():
            env = apply_shellenv(result.stdout, env)
            for name in ("PATH", "HOMEBREW_PREFIX"):
                if name in env:
                    logger.info("Set %s to %s", name, env[name])
            break
    else:
        logger.warning(
            "Could not update PATH from brew shellenv; "
            "some commands might require a new terminal session.",
        )

    return ensure_paths(env, settings.brew_bin_dirs)
