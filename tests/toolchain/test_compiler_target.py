"""
Tests for compiler target resolution.
"""

import pytest

from macrtools.core.models.target import InstallMethod
from macrtools.core.services.toolchain.data.compiler_matrix import SUPPORTED_MINOR_VERSIONS
from macrtools.core.services.toolchain.data.constants import GFORTRAN_BASE_URL
from macrtools.core.services.toolchain.domain.compiler_target import (
    is_supported,
    resolve_compiler_target,
)
from macrtools.core.services.toolchain.domain.errors import UnsupportedEnvironmentError


class TestResolveCompilerTarget:
    def test_sierra_build_on_high_sierra(self):
        target = resolve_compiler_target(13)
        assert (target.version, target.checksum) == ("6.3", "1849cea667bb714c5c04a8565a9fe231")
        assert target.url(GFORTRAN_BASE_URL) == (
            "https://github.com/fxcoudert/gfortran-for-macOS/releases/download/"
            "6.3/gfortran-6.3-Sierra.dmg"
        )

    def test_mojave(self):
        target = resolve_compiler_target(14)
        assert (target.version, target.checksum) == ("8.2", "fbae8829503018b736a5a7013e3a6503")
        assert target.file_name == "gfortran-8.2-Mojave.dmg"
        assert target.package_path == "gfortran-8.2-Mojave/gfortran.pkg"

    def test_sierra(self):
        assert resolve_compiler_target(12).file_name == "gfortran-6.3-Sierra.dmg"

    @pytest.mark.parametrize("minor", SUPPORTED_MINOR_VERSIONS)
    def test_total_over_supported_set(self, minor: int):
        target = resolve_compiler_target(minor)
        assert target.algorithm == "md5"
        assert len(target.checksum) == 32
        assert is_supported(minor)

    @pytest.mark.parametrize("minor", [0, 9, 10, 11, 15, 99, -1])
    def test_unsupported_is_fatal(self, minor: int):
        assert not is_supported(minor)
        with pytest.raises(UnsupportedEnvironmentError, match="not supported"):
            resolve_compiler_target(minor)

    def test_as_install_target(self):
        target = resolve_compiler_target(14).as_install_target("https://mirror.example.org/gf")
        assert target.method == InstallMethod.DISK_IMAGE
        assert target.checksum == "md5:fbae8829503018b736a5a7013e3a6503"
        assert target.source == "https://mirror.example.org/gf/8.2/gfortran-8.2-Mojave.dmg"
        assert target.base_url == "https://mirror.example.org/gf/8.2/"
        assert target.file_name == "gfortran-8.2-Mojave.dmg"
