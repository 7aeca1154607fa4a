"""
L4 Execution — handlers that actually touch the system (via a Shell).
"""

from devenv.core.services.installer.execution.handlers import (  # noqa: F401
    INSTALL_HANDLERS,
    run_install_handler,
    run_post_install,
)
from devenv.core.services.installer.execution.presence import (  # noqa: F401
    command_exists,
    is_installed,
)
