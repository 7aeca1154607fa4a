"""
Settings model — validated contents of devenv.yml.

Every field has a default, so an absent config file yields a
fully working Settings() instance.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from devenv.core.models.package import InstallMethod

HOMEBREW_INSTALL_COMMAND = (
    '/bin/bash -c "$(curl -fsSL '
    'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
)


class PackageSpec(BaseModel):
    """A package declared in devenv.yml (the id is the mapping key)."""

    name: str
    method: InstallMethod = InstallMethod.DIRECT
    command: str | None = None
    check: str
    dependencies: list[str] = Field(default_factory=list)
    post_install: list[str] = Field(default_factory=list)
    requires_sudo: bool = False


class Settings(BaseModel):
    """Installer settings."""

    defaults: list[str] | None = None  # None → built-in defaults
    fallback_ruby_version: str = "3.3.0"
    brew_prefixes: list[str] = Field(default_factory=lambda: ["/opt/homebrew", "/usr/local"])
    homebrew_install_command: str = HOMEBREW_INSTALL_COMMAND
    command_timeout: int | None = None
    packages: dict[str, PackageSpec] = Field(default_factory=dict)

    @property
    def brew_bin_dirs(self) -> list[str]:
        """``bin`` directory of every Homebrew prefix, in priority order."""
        return [f"{prefix.rstrip('/')}/bin" for prefix in self.brew_prefixes]
