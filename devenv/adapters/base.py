"""
Shell base — the protocol contract between installer and the system.

The installer only talks to the outside world through this
interface, never by calling subprocess directly. That keeps the
resolver, handlers and orchestrator testable against MockShell.
"""

from __future__ import annotations

import os
import shutil
from abc import ABC, abstractmethod
from collections.abc import Mapping

from devenv.core.models.command import CommandResult


class Shell(ABC):
    """Abstract base class for command execution.

    Implementations NEVER raise on a failing command — failures are
    captured in the CommandResult.

    ``env`` is the environment snapshot every command runs with. The
    PATH-update step replaces it wholesale (``shell.env = new_env``);
    later presence checks and ``which`` lookups see the new value.
    """

    def __init__(self, env: Mapping[str, str] | None = None):
        self.env: dict[str, str] = dict(os.environ if env is None else env)

    @abstractmethod
    def run(self, command: str, *, requires_sudo: bool = False) -> CommandResult:
        """Run *command* attached to the terminal.

        Args:
            command: Shell command line.
            requires_sudo: Prefix with a privilege-escalation wrapper.
        """

    @abstractmethod
    def capture(self, command: str) -> CommandResult:
        """Run *command* and return its stdout in the result."""

    @abstractmethod
    def check(self, command: str) -> bool:
        """Run *command* silently; True when it exits 0. Never raises."""

    def which(self, binary: str) -> str | None:
        """Resolve *binary* (first word only) on the snapshot's PATH."""
        name = binary.split()[0] if binary.strip() else ""
        if not name:
            return None
        return shutil.which(name, path=self.env.get("PATH", ""))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
