"""
L4 Execution: Command line tools in-progress sentinel.

``softwareupdate`` only offers the command line tools while this file
exists. It is an external signal, never read by the installer itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from macrtools.core.services.toolchain.domain.errors import PrivilegedOperationError

logger = logging.getLogger(__name__)


@contextmanager
def in_progress_sentinel(path: Path | str) -> Iterator[Path]:
    """Create the sentinel for the ``with`` block; remove it on every exit path."""
    sentinel = Path(path)
    try:
        sentinel.parent.mkdir(parents=True, exist_ok=True)
        sentinel.touch()
    except OSError as e:
        raise PrivilegedOperationError(f"Cannot create sentinel {sentinel}: {e}") from e
    logger.debug("Created sentinel %s", sentinel)
    try:
        yield sentinel
    finally:
        sentinel.unlink(missing_ok=True)
        logger.debug("Removed sentinel %s", sentinel)
