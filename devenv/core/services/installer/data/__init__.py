"""
L0 Data — static catalog re-exports.
"""

from devenv.core.services.installer.data.catalog import (  # noqa: F401
    BUILTIN_PACKAGES,
    DEFAULT_PACKAGES,
)
