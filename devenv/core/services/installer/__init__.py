"""
Installer service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → execution → orchestration)::

    from devenv.core.services.installer import install_packages, resolve
"""

# ── L0: Data ──
from devenv.core.services.installer.data.catalog import (  # noqa: F401
    BUILTIN_PACKAGES,
    DEFAULT_PACKAGES,
)

# ── L1: Domain ──
from devenv.core.services.installer.domain.resolver import (  # noqa: F401
    ResolutionResult,
    resolve,
)
from devenv.core.services.installer.domain.validation import (  # noqa: F401
    validate_catalog,
)

# ── L4: Execution ──
from devenv.core.services.installer.execution.presence import (  # noqa: F401
    is_installed,
)

# ── L5: Orchestration ──
from devenv.core.services.installer.orchestration.bootstrap import (  # noqa: F401
    BootstrapError,
    ensure_package_manager,
)
from devenv.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    PackageResult,
    RunOutcome,
    install_packages,
)
