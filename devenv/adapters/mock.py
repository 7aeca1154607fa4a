"""
Mock shell — test double for every command the installer runs.

Used in mock mode (``--mock``) and in tests to exercise the installer
without touching the system. By default every command succeeds,
every presence check fails (nothing installed) and every binary is
on PATH.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from devenv.adapters.base import Shell
from devenv.core.models.command import CommandResult


class MockShell(Shell):
    """Configurable Shell that records calls instead of running them.

    Args:
        env: Environment snapshot (default: ``{"PATH": "/usr/bin:/bin"}``).
        installed: Presence-check commands that report "installed".
        missing_binaries: Binaries ``which()`` reports as absent.
            None means every binary is present.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        *,
        installed: Iterable[str] = (),
        missing_binaries: Iterable[str] | None = (),
    ):
        super().__init__(env if env is not None else {"PATH": "/usr/bin:/bin"})
        self.installed: set[str] = set(installed)
        self.missing_binaries: set[str] = set(missing_binaries or ())
        self._failures: dict[str, int] = {}
        self._outputs: dict[str, str] = {}
        self._errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.sudo_commands: list[str] = []

    # ── Configuration ───────────────────────────────────────────

    def set_failure(self, command: str, exit_code: int = 1) -> None:
        """Make ``run``/``capture`` of *command* fail."""
        self._failures[command] = exit_code

    def set_output(self, command: str, stdout: str) -> None:
        """Set what ``capture`` of *command* prints."""
        self._outputs[command] = stdout

    def set_error(self, command: str, error: Exception) -> None:
        """Make *command* raise *error* (simulates an unexpected fault)."""
        self._errors[command] = error

    # ── Introspection ───────────────────────────────────────────

    @property
    def commands_run(self) -> list[str]:
        """Commands passed to ``run()``, in order."""
        return [cmd for kind, cmd in self.calls if kind == "run"]

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def reset(self) -> None:
        """Clear the call log (configuration is kept)."""
        self.calls.clear()
        self.sudo_commands.clear()

    # ── Shell API ───────────────────────────────────────────────

    def run(self, command: str, *, requires_sudo: bool = False) -> CommandResult:
        self.calls.append(("run", command))
        if requires_sudo:
            self.sudo_commands.append(command)
        return self._result(command)

    def capture(self, command: str) -> CommandResult:
        self.calls.append(("capture", command))
        return self._result(command, stdout=self._outputs.get(command, ""))

    def check(self, command: str) -> bool:
        self.calls.append(("check", command))
        return command in self.installed

    def which(self, binary: str) -> str | None:
        name = binary.split()[0] if binary.strip() else ""
        if not name or name in self.missing_binaries:
            return None
        return f"/usr/bin/{name}"

    def _result(self, command: str, stdout: str = "") -> CommandResult:
        if command in self._errors:
            raise self._errors[command]
        if command in self._failures:
            code = self._failures[command]
            return CommandResult.failure(
                command, f"Command failed (exit {code})", exit_code=code,
            )
        return CommandResult.success(command, stdout=stdout)
