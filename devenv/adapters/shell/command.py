"""
Shell command runner — the SINGLE PLACE where installer commands
reach ``subprocess.run``.

Sudo invariants:
- Password piped via stdin only (``sudo -S``)
- ``-k`` invalidates cached credentials every time
- Password never logged, never in the command line, never on disk
- Already root → no sudo prefix at all
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable, Mapping

import click

from devenv.adapters.base import Shell
from devenv.core.models.command import CommandResult

logger = logging.getLogger(__name__)


def _prompt_password(command: str) -> str:
    click.secho(
        f"🔐 This command requires administrator privileges: {command}",
        fg="yellow",
    )
    return click.prompt("Enter your password", hide_input=True, default="", show_default=False)


class ShellRunner(Shell):
    """Run shell commands through ``/bin/sh``.

    Args:
        env: Environment snapshot (default: a copy of ``os.environ``).
        timeout: Seconds before a command is killed (None = no limit).
        echo: Print "Running: ..." and the exit status for ``run()``.
        password_prompt: Called once, the first time sudo is needed.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        *,
        timeout: int | None = None,
        echo: bool = False,
        password_prompt: Callable[[str], str] = _prompt_password,
    ):
        super().__init__(env)
        self.timeout = timeout
        self.echo = echo
        self._password_prompt = password_prompt
        self._password: str | None = None

    # ── Public API ──────────────────────────────────────────────

    def run(self, command: str, *, requires_sudo: bool = False) -> CommandResult:
        args: str | list[str] = command
        stdin_data: str | None = None
        display = command

        if requires_sudo and os.geteuid() != 0:
            if self._password is None:
                self._password = self._password_prompt(command)
            args = ["sudo", "-S", "-k", "-p", "", "/bin/sh", "-c", command]
            stdin_data = self._password + "\n"
            display = f"sudo {command}"

        if self.echo:
            click.echo(f"⚡ Running: {display}")

        result = self._execute(args, display, input=stdin_data)
        if stdin_data is not None and not result.ok:
            # Possibly a wrong password: ask again next time.
            self._password = None

        if self.echo:
            if result.ok:
                click.secho("✅ Command completed successfully", fg="green")
            else:
                code = result.exit_code if result.exit_code is not None else "N/A"
                click.secho(f"❌ Command failed with exit code: {code}", fg="red")
        return result

    def capture(self, command: str) -> CommandResult:
        return self._execute(command, command, capture=True)

    def check(self, command: str) -> bool:
        result = self._execute(command, command, quiet=True)
        return result.ok

    # ── Internals ───────────────────────────────────────────────

    def _execute(
        self,
        args: str | list[str],
        display: str,
        *,
        input: str | None = None,
        capture: bool = False,
        quiet: bool = False,
    ) -> CommandResult:
        logger.info("Running: %s", display)
        start = time.monotonic()

        kwargs: dict = {"env": self.env, "text": True, "timeout": self.timeout}
        if isinstance(args, str):
            kwargs["shell"] = True
        if input is not None:
            kwargs["input"] = input
        if capture:
            kwargs["stdout"] = subprocess.PIPE
            kwargs["stderr"] = subprocess.DEVNULL
        elif quiet:
            kwargs["stdout"] = subprocess.DEVNULL
            kwargs["stderr"] = subprocess.DEVNULL

        try:
            proc = subprocess.run(args, **kwargs)
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %ss: %s", self.timeout, display)
            return CommandResult.failure(display, f"Command timed out ({self.timeout}s)")
        except OSError as e:
            logger.error("Could not start command %s: %s", display, e)
            return CommandResult.failure(display, str(e))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (proc.stdout or "") if capture else ""

        if proc.returncode == 0:
            return CommandResult.success(display, stdout=stdout, duration_ms=elapsed_ms)

        logger.debug("Command exited %d: %s", proc.returncode, display)
        return CommandResult.failure(
            display,
            f"Command failed (exit {proc.returncode})",
            exit_code=proc.returncode,
            stdout=stdout,
            duration_ms=elapsed_ms,
        )
