"""
L0 Data: ``__init__.py`` re-exports.

Constants and lookup tables. No logic.
"""

from macrtools.core.services.toolchain.data.compiler_matrix import (  # noqa: F401
    SUPPORTED_MINOR_VERSIONS,
    _GFORTRAN_BUILDS,
)
from macrtools.core.services.toolchain.data.constants import (  # noqa: F401
    BACKUP_SUFFIX,
    CLT_CATALOG_PATTERN,
    CLT_IN_PROGRESS_SENTINEL,
    CLT_INSTALL_DIR,
    GFORTRAN_BASE_URL,
    GFORTRAN_MOUNT_POINT,
    INSTALL_TARGET_VOLUME,
    R_CONFIG_FILES,
    SELECTION_RESET_MINOR_VERSIONS,
    USER_AGENT,
)
