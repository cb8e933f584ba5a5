"""
Toolchain install service: package re-exports.

Layers, innermost first: data → domain → detection → execution →
orchestration. Only the pure layers are re-exported here; import
detection, execution and orchestration from their subpackages::

    from macrtools.core.services.toolchain.orchestration import install_toolchain
"""

# ── L0: Data ──
from macrtools.core.services.toolchain.data.compiler_matrix import (  # noqa: F401
    SUPPORTED_MINOR_VERSIONS,
)

# ── L1: Domain ──
from macrtools.core.services.toolchain.domain.compiler_target import (  # noqa: F401
    resolve_compiler_target,
)
from macrtools.core.services.toolchain.domain.errors import (  # noqa: F401
    InstallError,
    IntegrityError,
    PrivilegedOperationError,
    TransportError,
    UnsupportedEnvironmentError,
)
from macrtools.core.services.toolchain.domain.os_version import (  # noqa: F401
    parse_minor_version,
)
