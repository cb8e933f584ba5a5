"""
L4 Execution: Core subprocess runner.

The single place where ``subprocess.run`` is called for commands that
change the system. Privilege, logging, and error capture live here.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

from macrtools.core.services.toolchain.domain.errors import PrivilegedOperationError

logger = logging.getLogger(__name__)


def _run_subprocess(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    sudo_password: str = "",
    timeout: int = 120,
) -> dict[str, Any]:
    """Run a command, elevating with sudo when required.

    Security invariants:
    - Password piped via stdin only (``sudo -S``)
    - ``-k`` invalidates cached credentials every time
    - Password never logged and never part of the command args

    When the process already runs as root (the installer postinstall
    case) no sudo prefix is added.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    display = " ".join(cmd)

    if needs_sudo and os.geteuid() != 0:
        if not sudo_password:
            return {
                "ok": False,
                "needs_sudo": True,
                "error": f"'{display}' requires root. Run as root or provide a sudo password.",
            }
        cmd = ["sudo", "-S", "-k"] + cmd

    logger.debug("Running: %s (timeout=%ss, sudo=%s)", display, timeout, needs_sudo)
    start = time.monotonic()
    try:
        stdin_data = (
            (sudo_password + "\n")
            if (needs_sudo and sudo_password and os.geteuid() != 0)
            else None
        )
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=stdin_data,
        )
        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode == 0:
            return {
                "ok": True,
                "stdout": result.stdout[-4000:] if result.stdout else "",
                "elapsed_ms": elapsed_ms,
            }

        stderr = result.stderr[-2000:] if result.stderr else ""

        if needs_sudo and (
            "incorrect password" in stderr.lower()
            or "sorry" in stderr.lower()
        ):
            return {
                "ok": False,
                "needs_sudo": True,
                "error": "Wrong sudo password.",
            }

        return {
            "ok": False,
            "error": f"'{display}' failed (exit {result.returncode})",
            "stderr": stderr,
            "stdout": result.stdout[-2000:] if result.stdout else "",
            "elapsed_ms": elapsed_ms,
        }

    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"'{display}' timed out ({timeout}s)"}
    except OSError as e:
        logger.exception("Subprocess error: %s", display)
        return {"ok": False, "error": f"'{display}' could not start: {e}"}


def run_privileged(
    cmd: list[str],
    *,
    sudo_password: str = "",
    timeout: int = 120,
    error_cls: type[PrivilegedOperationError] = PrivilegedOperationError,
) -> str:
    """Run ``cmd`` as root and return its stdout.

    Raises:
        PrivilegedOperationError: (or ``error_cls``) if the command fails.
    """
    result = _run_subprocess(
        cmd, needs_sudo=True, sudo_password=sudo_password, timeout=timeout,
    )
    if not result["ok"]:
        raise error_cls(result["error"], command=cmd, stderr=result.get("stderr", ""))
    logger.debug("%s finished in %sms", cmd[0], result.get("elapsed_ms", 0))
    return result["stdout"]
