"""
L0 Data: Fixed touchpoints of the toolchain install.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Presence of this directory means the command line tools are installed.
CLT_INSTALL_DIR = "/Library/Developer/CommandLineTools"

# softwareupdate only lists the command line tools while this file exists.
CLT_IN_PROGRESS_SENTINEL = (
    "/tmp/.com.apple.dt.CommandLineTools.installondemand.in-progress"
)

# Mojave ships with a tool-selection path that points nowhere usable.
SELECTION_RESET_MINOR_VERSIONS: frozenset[int] = frozenset({14})

# Catalog lines look like "   * Command Line Tools (macOS Mojave ...)"
# or, on newer releases, "* Label: Command Line Tools for Xcode-11.5".
CLT_CATALOG_PATTERN = r"\*.*Command Line"

# User-level R config files that older toolchain installs rewrote.
R_CONFIG_FILES: tuple[str, ...] = (".R/Makevars", ".Renviron")
BACKUP_SUFFIX = ".bck"

GFORTRAN_BASE_URL = (
    "https://github.com/fxcoudert/gfortran-for-macOS/releases/download/"
)
GFORTRAN_MOUNT_POINT = "/Volumes/gfortran"

INSTALL_TARGET_VOLUME = "/"

USER_AGENT = "macos-rtools/1.0"
