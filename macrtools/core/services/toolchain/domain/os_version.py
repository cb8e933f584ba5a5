"""
L1 Domain: OS version parsing (pure).

No I/O, no subprocess.
"""

from __future__ import annotations

import re

from macrtools.core.services.toolchain.domain.errors import UnsupportedEnvironmentError

# sw_vers drops the patch component for x.y.0 releases ("10.14").
_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


def parse_minor_version(version: str) -> int:
    """Return the minor component of a ``major.minor[.patch]`` string.

    Raises:
        UnsupportedEnvironmentError: If ``version`` is not two or three
            dot-separated integers.
    """
    m = _VERSION_RE.match(version.strip())
    if not m:
        raise UnsupportedEnvironmentError(
            f"Cannot parse OS version {version!r} (expected major.minor[.patch])"
        )
    return int(m.group(2))
