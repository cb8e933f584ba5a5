"""
Tests for config file backup and removal.

Runs the real ``cp``/``rm`` unprivileged against files in ``tmp_path``.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from macrtools.core.services.toolchain.domain.errors import CleanupError
from macrtools.core.services.toolchain.execution.backup import (
    backup_path_for,
    remove_if_present,
)


def test_backup_path_for():
    assert backup_path_for(Path("/home/u/.R/Makevars")) == Path("/home/u/.R/Makevars.bck")
    assert backup_path_for(Path("/home/u/.Renviron")) == Path("/home/u/.Renviron.bck")


class TestRemoveIfPresent:
    def test_backs_up_then_removes(self, tmp_path: Path):
        target = tmp_path / ".Renviron"
        target.write_text("R_LIBS_USER=~/R\n")

        backup = remove_if_present(target, privileged=False)

        assert backup == tmp_path / ".Renviron.bck"
        assert backup.read_text() == "R_LIBS_USER=~/R\n"
        assert not target.exists()

    def test_absent_is_noop(self, tmp_path: Path):
        target = tmp_path / ".R" / "Makevars"
        assert remove_if_present(target, privileged=False) is None
        assert remove_if_present(target, privileged=False) is None
        assert not backup_path_for(target).exists()

    def test_second_run_keeps_first_backup(self, tmp_path: Path):
        target = tmp_path / ".Renviron"
        target.write_text("first\n")
        remove_if_present(target, privileged=False)
        assert remove_if_present(target, privileged=False) is None
        assert (tmp_path / ".Renviron.bck").read_text() == "first\n"

    def test_existing_backup_overwritten(self, tmp_path: Path):
        target = tmp_path / ".Renviron"
        (tmp_path / ".Renviron.bck").write_text("stale\n")
        target.write_text("fresh\n")
        remove_if_present(target, privileged=False)
        assert (tmp_path / ".Renviron.bck").read_text() == "fresh\n"

    def test_copy_failure_leaves_original(self, tmp_path: Path):
        target = tmp_path / ".Renviron"
        target.write_text("keep\n")
        failed = {"ok": False, "error": "'cp' failed (exit 1)", "stderr": "denied"}
        with patch(
            "macrtools.core.services.toolchain.execution.backup._run_subprocess",
            return_value=failed,
        ):
            with pytest.raises(CleanupError, match="Could not back up"):
                remove_if_present(target, privileged=False)
        assert target.read_text() == "keep\n"

    def test_privileged_without_password_fails(self, tmp_path: Path):
        target = tmp_path / ".Renviron"
        target.write_text("x\n")
        with patch("os.geteuid", return_value=501):
            with pytest.raises(CleanupError, match="requires root"):
                remove_if_present(target, privileged=True, sudo_password="")
        assert target.exists()

    def test_cleanup_error_exit_code(self):
        assert CleanupError("x").exit_code == 5
