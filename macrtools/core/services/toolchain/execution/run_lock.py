"""
L4 Execution: Exclusive run lock.

Two concurrent runs would race on the scratch image, the sentinel and
the mount point, so a run holds an exclusive ``flock`` on a lock file
next to the scratch image. The kernel drops the lock when the holder
exits, so a crashed run never leaves a stale lock behind. The file
itself is never deleted; it only carries the holder's pid for the
error message.
"""

from __future__ import annotations

import fcntl
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from macrtools.core.services.toolchain.domain.errors import RunLockedError

logger = logging.getLogger(__name__)


def _read_owner(path: Path) -> int | None:
    try:
        return int(path.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return None


def acquire_lock(path: Path) -> int:
    """Take the lock or raise ``RunLockedError``.

    Returns:
        The open descriptor holding the lock; pass it to ``release_lock``.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_CREAT | os.O_RDWR, 0o644)
    except OSError as e:
        raise RunLockedError(f"Cannot open lock file {path}: {e}") from e

    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except BlockingIOError:
        os.close(fd)
        owner = _read_owner(path)
        raise RunLockedError(
            f"Another install run (pid {owner or 'unknown'}) holds {path}"
        ) from None

    os.ftruncate(fd, 0)
    os.write(fd, f"{os.getpid()}\n".encode())
    logger.debug("Acquired run lock %s", path)
    return fd


def release_lock(fd: int) -> None:
    """Clear the pid and drop the lock held on ``fd``."""
    try:
        os.ftruncate(fd, 0)
        fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)


@contextmanager
def exclusive_run_lock(path: Path) -> Iterator[Path]:
    fd = acquire_lock(path)
    try:
        yield path
    finally:
        release_lock(fd)
