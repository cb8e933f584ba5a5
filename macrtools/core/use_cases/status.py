"""
Status use case: what would an install run do on this machine?

Read-only: checks the OS version, the command line tools, the R config
files and the run ledger. Nothing is installed or downloaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from macrtools.core.config.loader import ConfigError, load_config
from macrtools.core.models.config import InstallerConfig
from macrtools.core.models.run import RunRecord
from macrtools.core.models.target import CompilerTarget
from macrtools.core.persistence.ledger import InstallLedger
from macrtools.core.services.toolchain.detection.os_version import read_os_version
from macrtools.core.services.toolchain.detection.toolchain import is_base_toolchain_installed
from macrtools.core.services.toolchain.domain.compiler_target import (
    is_supported,
    resolve_compiler_target,
)
from macrtools.core.services.toolchain.domain.errors import UnsupportedEnvironmentError
from macrtools.core.services.toolchain.domain.os_version import parse_minor_version


@dataclass
class StatusResult:
    """Snapshot of the machine from the installer's point of view."""

    config: InstallerConfig | None = None
    os_version: str | None = None
    minor_version: int | None = None
    supported: bool = False
    base_toolchain_installed: bool = False
    compiler: CompilerTarget | None = None
    config_files: dict[str, bool] = field(default_factory=dict)
    last_run: RunRecord | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        compiler = None
        if self.compiler and self.config:
            compiler = {
                "version": self.compiler.version,
                "os_name": self.compiler.os_name,
                "checksum": self.compiler.checksum_spec,
                "url": self.compiler.url(self.config.compiler_base_url),
            }
        return {
            "os_version": self.os_version,
            "minor_version": self.minor_version,
            "supported": self.supported,
            "base_toolchain_installed": self.base_toolchain_installed,
            "compiler": compiler,
            "config_files": self.config_files,
            "last_run": self.last_run.model_dump(mode="json") if self.last_run else None,
            "error": self.error,
        }


def get_status(config_path: Path | None = None) -> StatusResult:
    """Collect the status snapshot.  Errors land in ``result.error``."""
    result = StatusResult()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result
    result.config = config

    result.base_toolchain_installed = is_base_toolchain_installed(config.toolchain_dir)
    result.config_files = {str(p): p.exists() for p in config.config_paths}
    result.last_run = InstallLedger(config.ledger_path).last()

    try:
        result.os_version = read_os_version()
        result.minor_version = parse_minor_version(result.os_version)
    except UnsupportedEnvironmentError as e:
        result.error = str(e)
        return result

    result.supported = is_supported(result.minor_version)
    if result.supported:
        result.compiler = resolve_compiler_target(result.minor_version)
    else:
        result.error = f"macOS {result.os_version} is not supported"
    return result
