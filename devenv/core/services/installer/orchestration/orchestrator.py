"""
L5 Orchestration — Installation runs.

Resolve the request, then install each package in order, one at a
time. A failing package never stops the run: failures are recorded
and reported in the outcome (best-effort, report at end).

Flow:
    request → resolve → for each: present? → handler → post-install → outcome
"""

from __future__ import annotations

import logging
import time
import traceback
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Literal

from devenv.adapters.base import Shell
from devenv.core.models.package import Package
from devenv.core.models.settings import Settings
from devenv.core.services.installer.data.catalog import BUILTIN_PACKAGES
from devenv.core.services.installer.domain.resolver import ResolutionResult, resolve
from devenv.core.services.installer.execution.handlers import (
    run_install_handler,
    run_post_install,
)
from devenv.core.services.installer.execution.presence import is_installed

logger = logging.getLogger(__name__)

# on_progress(event, package, detail)
#   events: resolved | start | skip | installed | failed
ProgressCallback = Callable[[str, Package | None, str], None]


@dataclass
class PackageResult:
    """What happened to one package during a run."""

    package_id: str
    status: Literal["installed", "already-installed", "failed"]
    error: str | None = None
    trace: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    def to_dict(self) -> dict:
        return {
            "package": self.package_id,
            "status": self.status,
            "error": self.error,
            "duration_ms": self.duration_ms,
        }


@dataclass
class RunOutcome:
    """Result of one installation run. A fresh instance per run."""

    installed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    results: dict[str, PackageResult] = field(default_factory=dict)
    resolution: ResolutionResult | None = None
    dry_run: bool = False

    @property
    def all_ok(self) -> bool:
        return not self.failed

    @property
    def status(self) -> str:
        if not self.failed:
            return "ok"
        if self.installed:
            return "partial"
        return "failed"

    def record(self, result: PackageResult) -> None:
        """Add *result*, keeping each id in at most one list."""
        self.results[result.package_id] = result
        target = self.installed if result.ok else self.failed
        if result.package_id not in target:
            target.append(result.package_id)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "installed": list(self.installed),
            "failed": list(self.failed),
            "results": [r.to_dict() for r in self.results.values()],
            "resolution": self.resolution.to_dict() if self.resolution else None,
        }


def _notify(
    on_progress: ProgressCallback | None,
    event: str,
    package: Package | None,
    detail: str = "",
) -> None:
    if on_progress is None:
        return
    try:
        on_progress(event, package, detail)
    except Exception:
        logger.exception("Progress callback failed on '%s'", event)


def install_package(
    package: Package,
    shell: Shell,
    settings: Settings,
    on_progress: ProgressCallback | None = None,
) -> PackageResult:
    """Install one package. Never raises.

    Any exception from the handler is converted to a failed
    PackageResult carrying the error and its traceback.
    """
    start = time.monotonic()
    _notify(on_progress, "start", package)

    def _elapsed() -> int:
        return int((time.monotonic() - start) * 1000)

    try:
        if is_installed(package, shell):
            logger.info("%s is already installed", package.name)
            _notify(on_progress, "skip", package)
            return PackageResult(package.id, "already-installed", duration_ms=_elapsed())

        result = run_install_handler(package, shell, settings)
        if result.ok:
            run_post_install(package, shell)
            logger.info("%s installed", package.name)
            _notify(on_progress, "installed", package)
            return PackageResult(package.id, "installed", duration_ms=_elapsed())

        error = result.error or "installation failed"
        logger.warning("Failed to install %s: %s", package.name, error)
        _notify(on_progress, "failed", package, error)
        return PackageResult(package.id, "failed", error=error, duration_ms=_elapsed())

    except Exception as e:
        logger.exception("Error installing %s", package.name)
        error = f"{type(e).__name__}: {e}"
        _notify(on_progress, "failed", package, error)
        return PackageResult(
            package.id,
            "failed",
            error=error,
            trace=traceback.format_exc(),
            duration_ms=_elapsed(),
        )


def install_packages(
    requested: Iterable[str],
    *,
    shell: Shell,
    catalog: Mapping[str, Package] | None = None,
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
    dry_run: bool = False,
) -> RunOutcome:
    """Resolve *requested* and install everything in dependency order.

    Packages are installed strictly one after another. A failure is
    recorded and the run moves on, even when a later package depends
    on the one that failed.

    Args:
        requested: Package ids (unknown ids are ignored).
        shell: Command runner shared by every step of the run.
        catalog: id → descriptor mapping (default: built-in catalog).
        settings: Installer settings (default: ``Settings()``).
        on_progress: Optional progress callback for the UI.
        dry_run: Resolve only; install nothing.

    Returns:
        RunOutcome with installed and failed ids.
    """
    catalog = BUILTIN_PACKAGES if catalog is None else catalog
    settings = settings or Settings()

    resolution = resolve(requested, catalog)
    outcome = RunOutcome(resolution=resolution, dry_run=dry_run)

    names = ", ".join(catalog[pid].name for pid in resolution.order)
    logger.info("Resolved install order: %s", names or "(nothing)")
    _notify(on_progress, "resolved", None, names)

    if dry_run:
        return outcome

    for pid in resolution.order:
        outcome.record(install_package(catalog[pid], shell, settings, on_progress))

    logger.info(
        "Run finished: %d installed, %d failed",
        len(outcome.installed), len(outcome.failed),
    )
    return outcome
