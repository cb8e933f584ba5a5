"""
L3 Detection: Software update catalog query.

Runs ``softwareupdate -l`` and hands the listing to the pure parser
in ``domain/update_catalog.py``.
"""

from __future__ import annotations

import logging
import subprocess

from macrtools.core.services.toolchain.domain.errors import UnsupportedEnvironmentError
from macrtools.core.services.toolchain.domain.update_catalog import parse_clt_label

logger = logging.getLogger(__name__)


def list_update_catalog(timeout: int = 600) -> str:
    """Return the raw ``softwareupdate -l`` listing.

    softwareupdate writes some entries to stderr on older releases,
    so both streams are returned together.
    """
    try:
        r = subprocess.run(
            ["softwareupdate", "-l"],
            capture_output=True, text=True, timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise UnsupportedEnvironmentError(
            f"softwareupdate -l timed out after {timeout}s"
        ) from e
    except OSError as e:
        raise UnsupportedEnvironmentError(f"Cannot query update catalog: {e}") from e

    if r.returncode != 0:
        raise UnsupportedEnvironmentError(
            f"softwareupdate -l failed (exit {r.returncode}): {r.stderr.strip()[:300]}"
        )
    return "\n".join(part for part in (r.stdout, r.stderr) if part)


def resolve_update_label(timeout: int = 600) -> str:
    """Find the command line tools label in the update catalog.

    Raises:
        UnsupportedEnvironmentError: If the catalog lists no command
            line tools update.
    """
    listing = list_update_catalog(timeout=timeout)
    label = parse_clt_label(listing)
    if label is None:
        raise UnsupportedEnvironmentError(
            "No Command Line Tools update found in the software update catalog"
        )
    logger.info("Command line tools update label: %s", label)
    return label
