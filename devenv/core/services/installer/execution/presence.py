"""
L4 Execution — Presence checks.
"""

from __future__ import annotations

import logging

from devenv.adapters.base import Shell
from devenv.core.models.package import Package

logger = logging.getLogger(__name__)


def is_installed(package: Package, shell: Shell) -> bool:
    """Whether *package* is already present (its check command exits 0).

    Never raises: a check that cannot run counts as "not installed".
    """
    if not package.check:
        return False
    try:
        return shell.check(package.check)
    except Exception as e:
        logger.debug("Presence check for '%s' errored: %s", package.id, e)
        return False


def command_exists(binary: str, shell: Shell) -> bool:
    """Whether *binary* resolves on the shell's PATH."""
    return shell.which(binary) is not None
