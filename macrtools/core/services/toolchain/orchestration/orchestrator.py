"""
L5 Orchestration: Toolchain install state machine.

Drives one run from pre-flight to DONE:

    PREFLIGHT → CHECK_BASE_TOOLCHAIN → [RESET_SELECTION] →
    RESOLVE_UPDATE_LABEL → INSTALL_BASE → CLEANUP_ENV_FILES →
    RESOLVE_COMPILER_TARGET → FETCH_COMPILER → VERIFY_COMPILER →
    INSTALL_COMPILER → DONE

The base toolchain steps are skipped when the command line tools are
already installed. Any ``InstallError`` ends the run; nothing already
installed is rolled back. The finished ``RunRecord`` is appended to
the run ledger either way.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from macrtools.core.models.config import InstallerConfig
from macrtools.core.models.run import InstallStage, RunRecord
from macrtools.core.models.target import InstallMethod, InstallTarget
from macrtools.core.persistence.ledger import InstallLedger
from macrtools.core.services.toolchain.data.constants import SELECTION_RESET_MINOR_VERSIONS
from macrtools.core.services.toolchain.detection.os_version import read_os_version
from macrtools.core.services.toolchain.detection.toolchain import is_base_toolchain_installed
from macrtools.core.services.toolchain.detection.update_catalog import resolve_update_label
from macrtools.core.services.toolchain.domain.compiler_target import resolve_compiler_target
from macrtools.core.services.toolchain.domain.os_version import parse_minor_version
from macrtools.core.services.toolchain.execution.backup import remove_if_present
from macrtools.core.services.toolchain.execution.download import fetch_artifact, verify_artifact
from macrtools.core.services.toolchain.execution.installer import (
    install_catalog_update,
    install_from_disk_image,
    install_package,
    remove_scratch,
    reset_tool_selection,
)
from macrtools.core.services.toolchain.execution.run_lock import exclusive_run_lock
from macrtools.core.services.toolchain.execution.sentinel import in_progress_sentinel

logger = logging.getLogger(__name__)

ProgressFn = Callable[[str], None]


class ToolchainOrchestrator:
    """Runs the install state machine once.

    Args:
        config: Paths, URLs and timeouts for the run.
        sudo_password: Only needed when not running as root.
        progress: Receives one human-readable line per stage.
        ledger: Where the finished record goes (default: from config).
    """

    def __init__(
        self,
        config: InstallerConfig,
        *,
        sudo_password: str = "",
        progress: ProgressFn | None = None,
        ledger: InstallLedger | None = None,
    ):
        self.config = config
        self._sudo_password = sudo_password
        self._progress = progress or logger.info
        self._ledger = ledger or InstallLedger(config.ledger_path)
        self.record = RunRecord()

    # ── Public ──────────────────────────────────────────────────

    def run(self) -> RunRecord:
        """Execute the whole run.

        Returns:
            The finished record (status ``ok``).

        Raises:
            InstallError: On any fatal condition; the record is still
                written to the ledger with status ``failed``.
        """
        try:
            with exclusive_run_lock(self.config.lock_file):
                self._run()
        except Exception as e:
            self.record.finish(e)
            self._ledger.write(self.record)
            logger.error("Run %s failed at %s: %s", self.record.run_id, self.record.stage.value, e)
            raise
        self.record.finish()
        self._ledger.write(self.record)
        self._announce("Toolchain installation complete.")
        return self.record

    # ── Stages ──────────────────────────────────────────────────

    def _run(self) -> None:
        minor = self._preflight()

        self._enter(InstallStage.CHECK_BASE_TOOLCHAIN, "Checking for Command Line Tools...")
        installed = is_base_toolchain_installed(self.config.toolchain_dir)
        self.record.base_toolchain_installed = installed
        if installed:
            self._announce("Command Line Tools already installed.")
        else:
            self._install_base_toolchain(minor)

        self._cleanup_env_files()
        self._install_compiler(minor)

    def _preflight(self) -> int:
        """Read the OS version and reject unsupported releases up front."""
        self._enter(InstallStage.PREFLIGHT, "Detecting macOS version...")
        version = read_os_version()
        minor = parse_minor_version(version)
        self.record.os_version = version
        self.record.minor_version = minor
        # Fails before any network or privileged call
        resolve_compiler_target(minor)
        self._announce(f"macOS {version} detected.")
        return minor

    def _install_base_toolchain(self, minor: int) -> None:
        cfg = self.config
        with in_progress_sentinel(cfg.sentinel_path):
            if minor in SELECTION_RESET_MINOR_VERSIONS:
                self._enter(InstallStage.RESET_SELECTION, "Resetting developer tool selection...")
                reset_tool_selection(
                    sudo_password=self._sudo_password, timeout=cfg.timeouts.command,
                )

            self._enter(InstallStage.RESOLVE_UPDATE_LABEL, "Searching software updates for Command Line Tools...")
            label = resolve_update_label(timeout=cfg.timeouts.catalog)
            self.record.update_label = label

            self._enter(InstallStage.INSTALL_BASE, f"Installing {label}...")
            target = InstallTarget(name="Command Line Tools", source=label, method=InstallMethod.CATALOG)
            self._install_target(target)
        self._announce("Command Line Tools installed.")

    def _cleanup_env_files(self) -> None:
        self._enter(InstallStage.CLEANUP_ENV_FILES, "Removing old R toolchain configuration...")
        for path in self.config.config_paths:
            backup = remove_if_present(
                path,
                sudo_password=self._sudo_password,
                timeout=self.config.timeouts.command,
            )
            if backup is not None:
                self.record.backups.append(str(backup))
                self._announce(f"Backed up {path} to {backup} and removed it.")

    def _install_compiler(self, minor: int) -> None:
        cfg = self.config

        self._enter(InstallStage.RESOLVE_COMPILER_TARGET, "Selecting gfortran build...")
        compiler = resolve_compiler_target(minor)
        target = compiler.as_install_target(cfg.compiler_base_url)
        self.record.compiler_version = compiler.version
        self.record.compiler_url = target.source

        self._enter(InstallStage.FETCH_COMPILER, f"Downloading {target.file_name}...")
        artifact = fetch_artifact(
            target.base_url, target.file_name, cfg.scratch_dir, timeout=cfg.timeouts.download,
        )

        self._enter(InstallStage.VERIFY_COMPILER, f"Verifying {target.file_name}...")
        verify_artifact(artifact, target.checksum or "", algorithm=compiler.algorithm)

        self._enter(InstallStage.INSTALL_COMPILER, f"Installing {target.name}...")
        self._install_target(target, artifact)
        self._announce(f"{target.name} installed.")

    # ── Helpers ─────────────────────────────────────────────────

    def _install_target(self, target: InstallTarget, artifact: Path | None = None) -> None:
        """Dispatch an install on ``target.method``."""
        cfg = self.config
        if target.method == InstallMethod.CATALOG:
            install_catalog_update(
                target.source, sudo_password=self._sudo_password, timeout=cfg.timeouts.install,
            )
            return

        if artifact is None:
            raise ValueError(f"{target.name}: downloaded targets need a local artifact")

        if target.method == InstallMethod.PACKAGE:
            install_package(artifact, sudo_password=self._sudo_password, timeout=cfg.timeouts.install)
            remove_scratch(artifact)
        elif target.method == InstallMethod.DISK_IMAGE:
            install_from_disk_image(
                artifact,
                cfg.mount_point,
                target.package_path,
                sudo_password=self._sudo_password,
                command_timeout=cfg.timeouts.command,
                install_timeout=cfg.timeouts.install,
            )

    def _enter(self, stage: InstallStage, message: str) -> None:
        self.record.advance(stage)
        logger.debug("Stage → %s", stage.value)
        self._announce(message)

    def _announce(self, message: str) -> None:
        self._progress(message)


def install_toolchain(
    config: InstallerConfig,
    *,
    sudo_password: str = "",
    progress: ProgressFn | None = None,
) -> RunRecord:
    """Run a full toolchain install with ``config``."""
    return ToolchainOrchestrator(
        config, sudo_password=sudo_password, progress=progress,
    ).run()
