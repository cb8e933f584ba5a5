"""
L0 Data: gfortran builds per macOS release.

Source: https://github.com/fxcoudert/gfortran-for-macOS/releases
Maps the macOS minor version to the gfortran disk image built for it.
The Sierra image also runs on High Sierra.
"""

from __future__ import annotations

_GFORTRAN_BUILDS: dict[int, tuple[str, str, str]] = {
    # minor: (gfortran_version, release_name, md5)
    12: ("6.3", "Sierra", "1849cea667bb714c5c04a8565a9fe231"),
    13: ("6.3", "Sierra", "1849cea667bb714c5c04a8565a9fe231"),
    14: ("8.2", "Mojave", "fbae8829503018b736a5a7013e3a6503"),
}

SUPPORTED_MINOR_VERSIONS: tuple[int, ...] = tuple(sorted(_GFORTRAN_BUILDS))
