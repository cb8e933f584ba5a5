"""
Tests for the subprocess runner.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from macrtools.core.services.toolchain.domain.errors import (
    CleanupError,
    PrivilegedOperationError,
)
from macrtools.core.services.toolchain.execution.subprocess_runner import (
    _run_subprocess,
    run_privileged,
)


class TestRunSubprocess:
    def test_success(self):
        result = _run_subprocess(["echo", "hello"])
        assert result["ok"] is True
        assert result["stdout"].strip() == "hello"
        assert "elapsed_ms" in result

    def test_nonzero_exit(self):
        result = _run_subprocess(["false"])
        assert result["ok"] is False
        assert "'false' failed (exit 1)" in result["error"]

    def test_missing_binary(self):
        result = _run_subprocess(["definitely-not-a-real-binary-xyz"])
        assert result["ok"] is False
        assert "could not start" in result["error"]

    def test_timeout(self):
        result = _run_subprocess(["sleep", "5"], timeout=1)
        assert result["ok"] is False
        assert "timed out (1s)" in result["error"]

    @patch("os.geteuid", return_value=501)
    def test_sudo_needed_without_password(self, _euid):
        result = _run_subprocess(["installer", "-pkg", "x"], needs_sudo=True)
        assert result["ok"] is False
        assert result["needs_sudo"] is True
        assert "requires root" in result["error"]

    @patch("os.geteuid", return_value=501)
    def test_password_piped_not_in_args(self, _euid):
        done = MagicMock(returncode=0, stdout="ok", stderr="")
        with patch("subprocess.run", return_value=done) as run:
            _run_subprocess(["hdiutil", "detach", "/Volumes/x"], needs_sudo=True, sudo_password="s3cret")
        args, kwargs = run.call_args
        assert args[0] == ["sudo", "-S", "-k", "hdiutil", "detach", "/Volumes/x"]
        assert "s3cret" not in " ".join(args[0])
        assert kwargs["input"] == "s3cret\n"

    @patch("os.geteuid", return_value=0)
    def test_root_runs_without_sudo(self, _euid):
        done = MagicMock(returncode=0, stdout="", stderr="")
        with patch("subprocess.run", return_value=done) as run:
            result = _run_subprocess(["xcode-select", "--reset"], needs_sudo=True)
        assert result["ok"] is True
        assert run.call_args.args[0] == ["xcode-select", "--reset"]
        assert run.call_args.kwargs["input"] is None

    @patch("os.geteuid", return_value=501)
    def test_wrong_password(self, _euid):
        done = MagicMock(returncode=1, stdout="", stderr="Sorry, try again.\n")
        with patch("subprocess.run", return_value=done):
            result = _run_subprocess(["true"], needs_sudo=True, sudo_password="bad")
        assert result == {"ok": False, "needs_sudo": True, "error": "Wrong sudo password."}


class TestRunPrivileged:
    @patch("os.geteuid", return_value=0)
    def test_returns_stdout(self, _euid):
        done = MagicMock(returncode=0, stdout="mounted\n", stderr="")
        with patch("subprocess.run", return_value=done):
            assert run_privileged(["hdiutil", "attach", "x"]) == "mounted\n"

    @patch("os.geteuid", return_value=0)
    def test_raises_with_stderr(self, _euid):
        done = MagicMock(returncode=1, stdout="", stderr="installer: Error - package damaged")
        with patch("subprocess.run", return_value=done):
            with pytest.raises(PrivilegedOperationError) as exc:
                run_privileged(["installer", "-pkg", "x", "-target", "/"])
        assert exc.value.command == ["installer", "-pkg", "x", "-target", "/"]
        assert "package damaged" in str(exc.value)
        assert exc.value.exit_code == 5

    @patch("os.geteuid", return_value=0)
    def test_custom_error_class(self, _euid):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("rm", 1)):
            with pytest.raises(CleanupError, match="timed out"):
                run_privileged(["rm", "-f", "x"], error_cls=CleanupError)
