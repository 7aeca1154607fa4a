"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

No I/O, no subprocess: everything here is testable in isolation.
"""

from devenv.core.services.installer.domain.resolver import (  # noqa: F401
    ResolutionResult,
    find_cycles,
    resolve,
)
from devenv.core.services.installer.domain.shellenv import (  # noqa: F401
    apply_shellenv,
    ensure_paths,
    parse_shellenv,
    prepend_path,
)
from devenv.core.services.installer.domain.validation import (  # noqa: F401
    unknown_ids,
    validate_catalog,
    validate_package,
)
from devenv.core.services.installer.domain.versions import (  # noqa: F401
    pick_latest_version,
    stable_versions,
)
