"""
L4 Execution: ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: downloads, privileged installs,
file backups and removals, lock and sentinel files.
"""

from macrtools.core.services.toolchain.execution.backup import (  # noqa: F401
    backup_path_for,
    remove_if_present,
)
from macrtools.core.services.toolchain.execution.download import (  # noqa: F401
    compute_checksum,
    fetch_artifact,
    verify_artifact,
)
from macrtools.core.services.toolchain.execution.installer import (  # noqa: F401
    install_catalog_update,
    install_from_disk_image,
    install_package,
    mounted_image,
    remove_scratch,
    reset_tool_selection,
)
from macrtools.core.services.toolchain.execution.run_lock import (  # noqa: F401
    acquire_lock,
    exclusive_run_lock,
    release_lock,
)
from macrtools.core.services.toolchain.execution.sentinel import (  # noqa: F401
    in_progress_sentinel,
)
from macrtools.core.services.toolchain.execution.subprocess_runner import (  # noqa: F401
    _run_subprocess,
    run_privileged,
)
