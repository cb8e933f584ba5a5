"""
Tests for the in-progress sentinel and base toolchain detection.
"""

from pathlib import Path

import pytest

from macrtools.core.services.toolchain.detection.toolchain import is_base_toolchain_installed
from macrtools.core.services.toolchain.domain.errors import PrivilegedOperationError
from macrtools.core.services.toolchain.execution.sentinel import in_progress_sentinel


class TestInProgressSentinel:
    def test_exists_inside_block_only(self, tmp_path: Path):
        path = tmp_path / "tmp" / ".installondemand.in-progress"
        with in_progress_sentinel(path) as sentinel:
            assert sentinel.exists()
        assert not path.exists()

    def test_removed_on_error(self, tmp_path: Path):
        path = tmp_path / ".installondemand.in-progress"
        with pytest.raises(KeyboardInterrupt):
            with in_progress_sentinel(path):
                raise KeyboardInterrupt
        assert not path.exists()

    def test_tolerates_external_removal(self, tmp_path: Path):
        path = tmp_path / ".installondemand.in-progress"
        with in_progress_sentinel(path):
            path.unlink()
        assert not path.exists()


    def test_uncreatable_sentinel(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(PrivilegedOperationError, match="Cannot create sentinel"):
            with in_progress_sentinel(blocker / ".installondemand.in-progress"):
                pytest.fail("body must not run")


class TestBaseToolchainDetection:
    def test_present(self, tmp_path: Path):
        clt = tmp_path / "CommandLineTools"
        clt.mkdir()
        assert is_base_toolchain_installed(str(clt))

    def test_absent(self, tmp_path: Path):
        assert not is_base_toolchain_installed(str(tmp_path / "CommandLineTools"))

    def test_verdict_stable_across_checks(self, tmp_path: Path):
        clt = tmp_path / "CommandLineTools"
        first, second = is_base_toolchain_installed(str(clt)), is_base_toolchain_installed(str(clt))
        assert first is second is False

        clt.mkdir()
        first, second = is_base_toolchain_installed(str(clt)), is_base_toolchain_installed(str(clt))
        assert first is second is True

    def test_file_is_not_a_toolchain(self, tmp_path: Path):
        clt = tmp_path / "CommandLineTools"
        clt.write_text("")
        assert not is_base_toolchain_installed(str(clt))
