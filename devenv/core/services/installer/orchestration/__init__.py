"""
L5 Orchestration — top-level coordinators.
"""

from devenv.core.services.installer.orchestration.bootstrap import (  # noqa: F401
    BootstrapError,
    ensure_package_manager,
    update_brew_path,
)
from devenv.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    PackageResult,
    RunOutcome,
    install_package,
    install_packages,
)
