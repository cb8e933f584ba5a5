"""
L3 Detection: Base toolchain presence.
"""

from __future__ import annotations

import logging
from pathlib import Path

from macrtools.core.services.toolchain.data.constants import CLT_INSTALL_DIR

logger = logging.getLogger(__name__)


def is_base_toolchain_installed(toolchain_dir: str = CLT_INSTALL_DIR) -> bool:
    """Whether the command line tools directory exists."""
    installed = Path(toolchain_dir).is_dir()
    logger.debug("Command line tools at %s: %s", toolchain_dir, installed)
    return installed
