"""
Configuration loader — reads devenv.yml into Settings and a catalog.

The file is optional: without one the built-in catalog and defaults
are used. When present it is read as YAML, validated against the
Pydantic schema, and its ``packages`` are merged over the built-ins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from devenv.core.models.package import Catalog, Package
from devenv.core.models.settings import Settings
from devenv.core.services.installer.data.catalog import BUILTIN_PACKAGES, DEFAULT_PACKAGES

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "devenv.yml"

# Env var pointing at an explicit config file
CONFIG_ENV_VAR = "DEVENV_CONFIG"


class ConfigError(Exception):
    """Raised when devenv.yml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for devenv.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to devenv.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate installer settings.

    Lookup order: *path*, ``$DEVENV_CONFIG``, devenv.yml found by
    walking up from the cwd. No file at all → ``Settings()``.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])
        explicit = True
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using built-in settings", CONFIG_FILE)
        return Settings()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded %s with %d extra packages", path, len(settings.packages))
    return settings


def build_catalog(settings: Settings) -> Catalog:
    """Built-in catalog with the config's packages merged in.

    A config entry with a built-in id replaces that descriptor in
    place; new ids are appended in file order.
    """
    catalog: Catalog = dict(BUILTIN_PACKAGES)
    for pid, spec in settings.packages.items():
        if pid in catalog:
            logger.debug("Overriding built-in package '%s'", pid)
        catalog[pid] = Package(id=pid, **spec.model_dump())
    return catalog


def default_packages(settings: Settings) -> list[str]:
    """Ids installed by the "all" option."""
    if settings.defaults is None:
        return list(DEFAULT_PACKAGES)
    return list(settings.defaults)
