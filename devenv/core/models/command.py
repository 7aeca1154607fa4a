"""
Command result model — the execution contract.

Every shell invocation returns a CommandResult. The shell adapters
NEVER raise on a failing command — failures are captured here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CommandResult(BaseModel):
    """Outcome of one shell command.

    ``command`` is the display form: it never carries a password.
    ``exit_code`` is None when the process could not be started
    or was killed on timeout.
    """

    command: str
    ok: bool
    exit_code: int | None = None
    stdout: str = ""
    error: str | None = None
    duration_ms: int = 0

    @classmethod
    def success(cls, command: str, **kwargs: Any) -> CommandResult:
        """Create a success result."""
        return cls(command=command, ok=True, exit_code=kwargs.pop("exit_code", 0), **kwargs)

    @classmethod
    def failure(cls, command: str, error: str, **kwargs: Any) -> CommandResult:
        """Create a failure result."""
        return cls(command=command, ok=False, error=error, **kwargs)
