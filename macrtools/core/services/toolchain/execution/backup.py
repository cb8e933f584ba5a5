"""
L4 Execution: Back up and remove config files.

Used for the R config files that older toolchain installs rewrote.
A missing file is not an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from macrtools.core.services.toolchain.data.constants import BACKUP_SUFFIX
from macrtools.core.services.toolchain.domain.errors import CleanupError
from macrtools.core.services.toolchain.execution.subprocess_runner import _run_subprocess

logger = logging.getLogger(__name__)


def backup_path_for(path: Path) -> Path:
    """Sibling backup path (``<path>.bck``)."""
    return path.with_name(path.name + BACKUP_SUFFIX)


def remove_if_present(
    path: Path,
    *,
    privileged: bool = True,
    sudo_password: str = "",
    timeout: int = 120,
) -> Path | None:
    """Back up ``path`` to ``<path>.bck`` and delete it.

    A previous backup is overwritten. The backup is confirmed to exist
    before the original is removed.

    Returns:
        The backup path, or None if ``path`` did not exist.

    Raises:
        CleanupError: If the copy or the delete fails.
    """
    if not path.exists():
        logger.info("%s not present, ensured absent", path)
        return None

    backup = backup_path_for(path)
    result = _run_subprocess(
        ["cp", "-p", str(path), str(backup)],
        needs_sudo=privileged,
        sudo_password=sudo_password,
        timeout=timeout,
    )
    if not result["ok"]:
        raise CleanupError(
            f"Could not back up {path}: {result['error']}",
            command=["cp", "-p", str(path), str(backup)],
            stderr=result.get("stderr", ""),
        )
    if not backup.exists():
        raise CleanupError(f"Backup {backup} missing after copy; leaving {path} in place")
    logger.info("Backed up %s → %s", path, backup)

    result = _run_subprocess(
        ["rm", "-f", str(path)],
        needs_sudo=privileged,
        sudo_password=sudo_password,
        timeout=timeout,
    )
    if not result["ok"]:
        raise CleanupError(
            f"Could not remove {path}: {result['error']}",
            command=["rm", "-f", str(path)],
            stderr=result.get("stderr", ""),
        )
    logger.info("Removed %s", path)
    return backup
