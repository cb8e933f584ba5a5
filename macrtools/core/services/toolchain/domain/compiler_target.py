"""
L1 Domain: Compiler target resolution (pure).

Maps the macOS minor version to the gfortran build to install.
No I/O, no subprocess.
"""

from __future__ import annotations

from macrtools.core.models.target import CompilerTarget
from macrtools.core.services.toolchain.data.compiler_matrix import (
    SUPPORTED_MINOR_VERSIONS,
    _GFORTRAN_BUILDS,
)
from macrtools.core.services.toolchain.domain.errors import UnsupportedEnvironmentError


def is_supported(minor: int) -> bool:
    """Whether a gfortran build exists for macOS 10.<minor>."""
    return minor in _GFORTRAN_BUILDS


def resolve_compiler_target(minor: int) -> CompilerTarget:
    """Return the gfortran build for macOS 10.<minor>.

    Raises:
        UnsupportedEnvironmentError: For any minor version outside
            ``SUPPORTED_MINOR_VERSIONS``.
    """
    build = _GFORTRAN_BUILDS.get(minor)
    if build is None:
        supported = ", ".join(f"10.{v}" for v in SUPPORTED_MINOR_VERSIONS)
        raise UnsupportedEnvironmentError(
            f"macOS 10.{minor} is not supported (supported: {supported})"
        )
    version, os_name, md5 = build
    return CompilerTarget(version=version, os_name=os_name, checksum=md5)
