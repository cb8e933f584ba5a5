"""
InstallerConfig: every path, URL and timeout a run touches.

The defaults are the real macOS touchpoints, so the postinstall entry
point needs no configuration at all. A YAML file can override any
field (tests point everything at a temp directory).
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

from macrtools.core.services.toolchain.data.constants import (
    CLT_IN_PROGRESS_SENTINEL,
    CLT_INSTALL_DIR,
    GFORTRAN_BASE_URL,
    GFORTRAN_MOUNT_POINT,
    R_CONFIG_FILES,
)


def _default_work_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "macrtools")


def _default_state_dir() -> str:
    return str(Path.home() / ".local" / "share" / "macos-rtools")


class Timeouts(BaseModel):
    """Upper bounds (seconds) for blocking calls."""

    command: int = Field(default=120, gt=0)     # hdiutil, cp, rm, xcode-select
    catalog: int = Field(default=600, gt=0)     # softwareupdate -l
    install: int = Field(default=3600, gt=0)    # softwareupdate -i, installer
    download: int = Field(default=60, gt=0)     # socket timeout per read


class InstallerConfig(BaseModel):
    """Configuration for one install run."""

    toolchain_dir: str = CLT_INSTALL_DIR
    sentinel_path: str = CLT_IN_PROGRESS_SENTINEL

    home_dir: str = "~"
    config_files: list[str] = Field(default_factory=lambda: list(R_CONFIG_FILES))

    compiler_base_url: str = GFORTRAN_BASE_URL
    mount_point: str = GFORTRAN_MOUNT_POINT
    work_dir: str = Field(default_factory=_default_work_dir)

    state_dir: str = Field(default_factory=_default_state_dir)
    lock_path: str = ""  # default: <work_dir>/install.lock

    timeouts: Timeouts = Field(default_factory=Timeouts)

    @property
    def home(self) -> Path:
        return Path(self.home_dir).expanduser()

    @property
    def config_paths(self) -> list[Path]:
        """Absolute paths of the R config files to clean up."""
        return [self.home / rel for rel in self.config_files]

    @property
    def scratch_dir(self) -> Path:
        return Path(self.work_dir).expanduser()

    @property
    def ledger_path(self) -> Path:
        return Path(self.state_dir).expanduser() / "runs.ndjson"

    @property
    def lock_file(self) -> Path:
        """Run lock. Lives beside the scratch image, which every run on the
        machine shares, whatever its home or state directory."""
        if self.lock_path:
            return Path(self.lock_path).expanduser()
        return self.scratch_dir / "install.lock"
