"""
L3 Detection: ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from macrtools.core.services.toolchain.detection.os_version import (  # noqa: F401
    current_minor_version,
    read_os_version,
)
from macrtools.core.services.toolchain.detection.toolchain import (  # noqa: F401
    is_base_toolchain_installed,
)
from macrtools.core.services.toolchain.detection.update_catalog import (  # noqa: F401
    list_update_catalog,
    resolve_update_label,
)
