"""
L1 Domain: ``__init__.py`` re-exports all pure domain functions.

These functions never touch the system: no subprocess, no file
reads, no network.
"""

from macrtools.core.services.toolchain.domain.compiler_target import (  # noqa: F401
    is_supported,
    resolve_compiler_target,
)
from macrtools.core.services.toolchain.domain.download_helpers import (  # noqa: F401
    _fmt_size,
    split_checksum,
)
from macrtools.core.services.toolchain.domain.errors import (  # noqa: F401
    CleanupError,
    InstallError,
    IntegrityError,
    PrivilegedOperationError,
    RunLockedError,
    TransportError,
    UnsupportedEnvironmentError,
)
from macrtools.core.services.toolchain.domain.os_version import (  # noqa: F401
    parse_minor_version,
)
from macrtools.core.services.toolchain.domain.update_catalog import (  # noqa: F401
    find_clt_labels,
    parse_clt_label,
)
