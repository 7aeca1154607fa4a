"""Adapters — the installer's bindings to the operating system.

Public re-exports for convenient access.
"""

from devenv.adapters.base import Shell
from devenv.adapters.mock import MockShell
from devenv.adapters.shell.command import ShellRunner

__all__ = [
    "MockShell",
    "Shell",
    "ShellRunner",
]
