"""
L5 Orchestration: ``__init__.py`` re-exports.
"""

from macrtools.core.services.toolchain.orchestration.orchestrator import (  # noqa: F401
    ToolchainOrchestrator,
    install_toolchain,
)
