"""
L3 Detection: macOS version.

Read-only query of the OS product version via ``sw_vers``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from macrtools.core.services.toolchain.domain.errors import UnsupportedEnvironmentError
from macrtools.core.services.toolchain.domain.os_version import parse_minor_version

logger = logging.getLogger(__name__)


def read_os_version(timeout: int = 10) -> str:
    """Return the product version string, e.g. ``"10.14.6"``.

    Raises:
        UnsupportedEnvironmentError: If ``sw_vers`` is missing or fails
            (i.e. this is not macOS).
    """
    if not shutil.which("sw_vers"):
        raise UnsupportedEnvironmentError("sw_vers not found; this installer runs on macOS only")
    try:
        r = subprocess.run(
            ["sw_vers", "-productVersion"],
            capture_output=True, text=True, timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise UnsupportedEnvironmentError(f"Cannot read OS version: {e}") from e
    if r.returncode != 0:
        raise UnsupportedEnvironmentError(
            f"sw_vers failed (exit {r.returncode}): {r.stderr.strip()}"
        )
    version = r.stdout.strip()
    logger.debug("OS product version: %s", version)
    return version


def current_minor_version() -> int:
    """Minor component of the running macOS version."""
    return parse_minor_version(read_os_version())
