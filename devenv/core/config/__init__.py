"""Configuration — devenv.yml loading."""

from devenv.core.config.loader import (  # noqa: F401
    ConfigError,
    build_catalog,
    default_packages,
    find_config_file,
    load_settings,
)
