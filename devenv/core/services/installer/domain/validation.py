"""
L1 Domain — Catalog validation (pure).

Checks a catalog for the mistakes a hand-edited devenv.yml can
introduce: dangling dependency references, cycles, and packages
that have nothing to run.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from devenv.core.models.package import InstallMethod, Package
from devenv.core.services.installer.domain.resolver import find_cycles


def validate_package(package: Package, catalog: Mapping[str, Package]) -> list[str]:
    """Validate one descriptor against the catalog it lives in.

    Returns:
        List of error strings (empty = valid).
    """
    errors: list[str] = []

    for dep in package.dependencies:
        if dep == package.id:
            errors.append(f"'{package.id}' depends on itself")
        elif dep not in catalog:
            errors.append(f"'{package.id}' depends on unknown package '{dep}'")

    # The version-manager method builds its own commands.
    if package.method != InstallMethod.VERSION_MANAGER_CUSTOM and not package.command:
        errors.append(f"'{package.id}' ({package.method.value}) has no install command")

    if not package.check.strip():
        errors.append(f"'{package.id}' has an empty presence check")

    return errors


def validate_catalog(catalog: Mapping[str, Package]) -> list[str]:
    """Validate every descriptor, then look for dependency cycles."""
    errors: list[str] = []
    for package in catalog.values():
        errors.extend(validate_package(package, catalog))

    for cycle in find_cycles(catalog):
        if len(cycle) > 2:  # self-loops are already reported above
            errors.append("Dependency cycle: " + " → ".join(cycle))

    return errors


def unknown_ids(ids: Iterable[str], catalog: Mapping[str, Package]) -> list[str]:
    """Ids from *ids* that the catalog does not define."""
    return [pid for pid in ids if pid not in catalog]
