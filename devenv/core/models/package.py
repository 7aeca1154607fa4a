"""
Package model — the static description of one installable package.

Descriptors are defined once (built-in catalog + optional devenv.yml
entries) and never mutated at runtime.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InstallMethod(str, Enum):
    """Closed set of installation methods.

    Each method is handled by exactly one install handler.
    """

    PACKAGE_MANAGER = "package-manager"
    VERSION_MANAGER_CUSTOM = "version-manager-custom"
    LANGUAGE_PACKAGE_MANAGER = "language-package-manager"
    DOWNLOAD_SCRIPT = "download-script"
    DIRECT = "direct"

    @property
    def required_tool(self) -> str | None:
        """The external binary this method cannot work without."""
        return _REQUIRED_TOOLS[self]


_REQUIRED_TOOLS: dict[InstallMethod, str | None] = {
    InstallMethod.PACKAGE_MANAGER: "brew",
    InstallMethod.VERSION_MANAGER_CUSTOM: "rbenv",
    InstallMethod.LANGUAGE_PACKAGE_MANAGER: "ruby",
    InstallMethod.DOWNLOAD_SCRIPT: "curl",
    InstallMethod.DIRECT: None,
}


class Package(BaseModel):
    """A package descriptor.

    ``dependencies`` lists the ids that must be installed first.
    ``post_install`` commands run best-effort after a successful install.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    method: InstallMethod
    command: str | None = None
    check: str
    dependencies: tuple[str, ...] = Field(default_factory=tuple)
    post_install: tuple[str, ...] = Field(default_factory=tuple)
    requires_sudo: bool = False

    def __str__(self) -> str:
        return self.name


# An ordered id → descriptor mapping; order defines menu numbering.
Catalog = dict[str, Package]
