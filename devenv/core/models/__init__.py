"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from devenv.core.models import Package, InstallMethod, CommandResult, Settings
"""

from devenv.core.models.command import CommandResult
from devenv.core.models.package import Catalog, InstallMethod, Package
from devenv.core.models.settings import PackageSpec, Settings

__all__ = [
    # command.py
    "CommandResult",
    # package.py
    "Catalog",
    "InstallMethod",
    "Package",
    # settings.py
    "PackageSpec",
    "Settings",
]
